import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Response identification
SERVER_NAME = os.getenv('S3_SERVER_NAME', 'AmazonS3')

# Request uid chain forwarded by trusted internal upstreams, never by clients
UPSTREAM_UIDS_HEADER = os.getenv('S3_UPSTREAM_UIDS_HEADER', 'x-s3routes-request-uids')

# Error table location, defaults to the copy bundled with the package
ERRORS_PATH = os.getenv(
    'S3_ERRORS_PATH',
    os.path.join(os.path.dirname(__file__), 'routes', 'utils', 's3_errors.json')
)

# Bytes read per chunk when streaming from file-like sources
STREAM_CHUNK_SIZE = int(os.getenv('STREAM_CHUNK_SIZE', 64 * 1024))

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = os.getenv('LOG_FORMAT', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# API Configuration
API_HOST = os.getenv('API_HOST', 'localhost')
API_PORT = int(os.getenv('API_PORT', 5555))
DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

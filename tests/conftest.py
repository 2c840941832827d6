"""Global test configuration and fixtures."""
import os
import sys
from pathlib import Path
from types import MappingProxyType
from unittest.mock import create_autospec

import pytest

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Test environment configuration
os.environ.setdefault('S3_SERVER_NAME', 'AmazonS3')
os.environ.setdefault('LOG_LEVEL', 'DEBUG')

from s3routes.connection import ResponseConnection
from s3routes.logger import RequestLogger
from s3routes.routes.utils import (
    ErrorEntry,
    ErrorTranslator,
    ResponseDispatcher,
    ResponseFinalizer
)

TEST_UIDS = 'a1b2c3d4e5f60718'


@pytest.fixture
def error_table():
    """Small error table independent of the bundled JSON."""
    return MappingProxyType({
        'InternalError': ErrorEntry('We encountered an internal error. Please try again.', 500),
        'NoSuchKey': ErrorEntry('The specified key does not exist.', 404),
        'NoSuchBucket': ErrorEntry('The specified bucket does not exist.', 404),
        'AccessDenied': ErrorEntry('Access Denied', 403),
        'BucketAlreadyExists': ErrorEntry('The requested bucket name is not available.', 409),
        'InvalidArgument': ErrorEntry('Invalid Argument', 400),
        'InvalidRequest': ErrorEntry('Invalid Request', 400),
    })


@pytest.fixture
def log():
    """Request logger double with a fixed uid chain."""
    mock = create_autospec(RequestLogger, instance=True)
    mock.get_serialized_uids.return_value = TEST_UIDS
    return mock


@pytest.fixture
def connection():
    return ResponseConnection()


@pytest.fixture
def dispatcher(error_table):
    return ResponseDispatcher(
        translator=ErrorTranslator(error_table),
        finalizer=ResponseFinalizer('AmazonS3')
    )

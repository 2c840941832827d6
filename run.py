from s3routes.app import create_app
from s3routes.config import API_HOST, API_PORT, DEBUG

app = create_app()

if __name__ == '__main__':
    app.run(host=API_HOST, port=API_PORT, debug=DEBUG)

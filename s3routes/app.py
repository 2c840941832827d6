"""Flask application factory wiring the response dispatch layer."""

import logging
from typing import Mapping, Optional

from flask import Flask, g, request
from flask_cors import CORS

from s3routes.config import LOG_FORMAT, LOG_LEVEL, SERVER_NAME
from s3routes.connection import ResponseConnection
from s3routes.logger import RequestLogger
from s3routes.routes.base import EXTENSION_KEY
from s3routes.routes.utils.dispatcher import ResponseDispatcher
from s3routes.routes.utils.errors import ErrorEntry, ErrorTranslator
from s3routes.routes.utils.response import ResponseFinalizer

logger = logging.getLogger(__name__)
request_logger = logging.getLogger('s3routes.request')


def create_app(error_table: Optional[Mapping[str, ErrorEntry]] = None,
               server_name: str = SERVER_NAME) -> Flask:
    """Create the Flask app with a dispatcher and per-request context.

    Args:
        error_table (Mapping): Error table to translate with; the bundled
            table is used when omitted
        server_name (str): Value of the ``server`` response header
    """
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    app = Flask(__name__)
    CORS(app, expose_headers=['x-amz-request-id', 'x-amz-id-2'])

    app.extensions[EXTENSION_KEY] = ResponseDispatcher(
        translator=ErrorTranslator(error_table),
        finalizer=ResponseFinalizer(server_name)
    )

    @app.before_request
    def bind_request_context():
        g.s3_log = RequestLogger.from_headers(request_logger, request.headers)
        g.s3_connection = ResponseConnection()
        g.s3_log.debug(f"{request.method} {request.path}")

    @app.route('/health')
    def health_check():
        """Health check endpoint."""
        return {'status': 'healthy'}

    logger.info(f"S3 response layer initialized (server: {server_name})")
    return app


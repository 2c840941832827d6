"""Base route utilities and decorators."""

import functools
import logging
import traceback

from flask import current_app, g

from s3routes.connection import ResponseConnection
from s3routes.logger import RequestLogger
from s3routes.routes.utils.dispatcher import ResponseDispatcher
from s3routes.routes.utils.errors import INTERNAL_ERROR, S3Error

logger = logging.getLogger(__name__)

EXTENSION_KEY = 's3routes'


def get_dispatcher() -> ResponseDispatcher:
    """Dispatcher registered on the current app."""
    return current_app.extensions[EXTENSION_KEY]


def get_request_log() -> RequestLogger:
    if 's3_log' not in g:
        g.s3_log = RequestLogger(logger)
    return g.s3_log


def get_connection() -> ResponseConnection:
    if 's3_connection' not in g:
        g.s3_connection = ResponseConnection()
    return g.s3_connection


def handle_s3_errors():
    """Decorator to answer S3 API errors with an S3 error document.

    The wrapped view writes its response through the request's connection and
    may return None, in which case the connection is rendered; a view that
    returns None without responding is answered with InternalError. A raised
    S3Error is answered with its code, any other exception with InternalError.
    Neither is written if the view already started responding.
    """
    def decorator(f):
        @functools.wraps(f)
        def decorated_function(*args, **kwargs):
            connection = get_connection()
            log = get_request_log()
            try:
                result = f(*args, **kwargs)
                if result is not None:
                    return result
                if not connection.headers_sent:
                    log.warning(f"{f.__name__} returned without responding")
                    get_dispatcher().respond_body(INTERNAL_ERROR, None, connection, log)
            except S3Error as e:
                log.error(f"S3 error in {f.__name__}: {e.message}")
                get_dispatcher().respond_body(e.code, None, connection, log)
            except Exception as e:
                log.error(f"Unexpected error in {f.__name__}: {str(e)}\n{traceback.format_exc()}")
                get_dispatcher().respond_body(INTERNAL_ERROR, None, connection, log)
            return connection.to_response()
        return decorated_function
    return decorator

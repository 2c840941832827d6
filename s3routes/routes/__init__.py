"""Route helpers for the S3-compatible API."""

from .base import handle_s3_errors, get_connection, get_dispatcher, get_request_log

__all__ = ['handle_s3_errors', 'get_connection', 'get_dispatcher', 'get_request_log']

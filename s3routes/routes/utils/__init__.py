"""Utility modules for S3-compatible APIs."""

from .dispatcher import ResponseDispatcher

from .errors import (
    ErrorDocument,
    ErrorEntry,
    ErrorTranslator,
    get_error_table,
    load_error_table,
    S3Error,
    NoSuchBucket,
    NoSuchKey,
    InvalidRequest,
    BucketAlreadyExists,
    AccessDenied
)

from .headers import (
    OVERRIDE_HEADERS,
    merge_overrides,
    extract_override_params,
    find_invalid_header
)

from .response import ResponseFinalizer

from .xml import serialize_xml

__all__ = [
    # Dispatch
    'ResponseDispatcher',
    'ResponseFinalizer',

    # Header overrides
    'OVERRIDE_HEADERS',
    'merge_overrides',
    'extract_override_params',
    'find_invalid_header',

    # XML handling
    'serialize_xml',

    # Error handling
    'ErrorDocument',
    'ErrorEntry',
    'ErrorTranslator',
    'get_error_table',
    'load_error_table',
    'S3Error',
    'NoSuchBucket',
    'NoSuchKey',
    'InvalidRequest',
    'BucketAlreadyExists',
    'AccessDenied'
]

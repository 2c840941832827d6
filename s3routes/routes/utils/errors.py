"""Error table, error documents and error translation for S3-compatible APIs."""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from s3routes.config import ERRORS_PATH
from .xml import serialize_xml

logger = logging.getLogger(__name__)

INTERNAL_ERROR = 'InternalError'
DEFAULT_HTTP_CODE = 500
DEFAULT_DESCRIPTION = 'We encountered an internal error. Please try again.'


@dataclass(frozen=True)
class ErrorEntry:
    """Description and HTTP status of one S3 error code."""
    description: str
    http_code: int


def load_error_table(path: str = ERRORS_PATH) -> Mapping[str, ErrorEntry]:
    """Load the error table from a JSON file.

    The file maps each error code to ``{"description": ..., "httpCode": ...}``.

    Returns:
        Mapping: Read-only mapping of error code to ErrorEntry
    """
    with open(path, encoding='utf-8') as f:
        raw = json.load(f)
    table = {
        code: ErrorEntry(description=entry['description'], http_code=int(entry['httpCode']))
        for code, entry in raw.items()
    }
    logger.info(f"Loaded {len(table)} S3 error codes from {path}")
    return MappingProxyType(table)


@lru_cache(maxsize=None)
def get_error_table() -> Mapping[str, ErrorEntry]:
    """Process-wide error table, loaded on first use."""
    return load_error_table()


@dataclass
class ErrorDocument:
    """S3 error document returned to the client."""
    code: str
    message: str
    resource: str = ''
    request_id: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Error': {
                'Code': self.code,
                'Message': self.message,
                'Resource': self.resource,
                'RequestId': self.request_id
            }
        }

    def to_xml(self) -> str:
        return serialize_xml(self.to_dict())


class ErrorTranslator:
    """Translate internal error codes into error documents and HTTP statuses.

    Unknown codes are answered with the ``InternalError`` description and
    status, but the document keeps the code that was asked for.
    """

    def __init__(self, error_table: Optional[Mapping[str, ErrorEntry]] = None):
        self.error_table = error_table if error_table is not None else get_error_table()

    def lookup(self, error_code: str) -> ErrorEntry:
        entry = self.error_table.get(error_code)
        if entry is not None:
            return entry
        logger.warning(f"Unknown S3 error code {error_code}, falling back to {INTERNAL_ERROR}")
        fallback = self.error_table.get(INTERNAL_ERROR)
        if fallback is None:
            return ErrorEntry(description=DEFAULT_DESCRIPTION, http_code=DEFAULT_HTTP_CODE)
        return fallback

    def translate(self, error_code: str) -> Tuple[ErrorDocument, int]:
        entry = self.lookup(error_code)
        return ErrorDocument(code=error_code, message=entry.description), entry.http_code


class S3Error(Exception):
    """Raised by a view to answer with the error document for ``code``.

    Subclasses fix the code; the message is only logged, the client sees the
    description from the error table.
    """
    code = INTERNAL_ERROR

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NoSuchBucket(S3Error):
    code = 'NoSuchBucket'

    def __init__(self, bucket):
        super().__init__(f"Bucket {bucket} not found")


class NoSuchKey(S3Error):
    code = 'NoSuchKey'

    def __init__(self, key):
        super().__init__(f"Key {key} not found")


class InvalidRequest(S3Error):
    code = 'InvalidRequest'


class BucketAlreadyExists(S3Error):
    code = 'BucketAlreadyExists'

    def __init__(self, bucket):
        super().__init__(f"Bucket {bucket} is already taken")


class AccessDenied(S3Error):
    code = 'AccessDenied'

    def __init__(self, resource):
        super().__init__(f"Access to {resource} denied")

"""Per-request logging with a serialized request uid chain."""

import datetime
import hashlib
import logging
import os
import re
from typing import Iterable, List, Mapping, Optional

from s3routes.config import UPSTREAM_UIDS_HEADER

UID_SEPARATOR = ':'
UID_PATTERN = re.compile(r'[A-Za-z0-9_-]{1,64}')


def generate_request_id() -> str:
    """Generate a unique request ID for AWS-style responses."""
    seed = datetime.datetime.now(datetime.timezone.utc).isoformat().encode() + os.urandom(8)
    return hashlib.md5(seed).hexdigest()[:16].upper()


class RequestLogger(logging.LoggerAdapter):
    """Logger adapter bound to one request.

    Every record is prefixed with the request's uid chain. The chain starts
    with the uids of an upstream request (if any) and always ends with a uid
    generated for this request.
    """

    def __init__(self, logger: logging.Logger, uids: Optional[Iterable[str]] = None):
        self.uids: List[str] = [uid for uid in (uids or []) if uid]
        self.uids.append(generate_request_id())
        super().__init__(logger, {'req_uids': self.get_serialized_uids()})

    @classmethod
    def from_serialized_uids(cls, logger: logging.Logger, serialized: Optional[str]) -> 'RequestLogger':
        uids = serialized.split(UID_SEPARATOR) if serialized else []
        return cls(logger, uids)

    @classmethod
    def from_headers(cls, logger: logging.Logger, headers: Mapping[str, str],
                     header_name: str = UPSTREAM_UIDS_HEADER) -> 'RequestLogger':
        """Continue the uid chain forwarded by an internal upstream, if any.

        Only ``header_name`` is read; ``x-amz-request-id`` sent by a client is
        ignored. Malformed uids are dropped from the chain.
        """
        serialized = headers.get(header_name)
        uids = serialized.split(UID_SEPARATOR) if serialized else []
        return cls(logger, [uid for uid in uids if UID_PATTERN.fullmatch(uid)])

    def get_serialized_uids(self) -> str:
        return UID_SEPARATOR.join(self.uids)

    def process(self, msg, kwargs):
        kwargs['extra'] = {**self.extra, **kwargs.get('extra', {})}
        return f"[{self.get_serialized_uids()}] {msg}", kwargs

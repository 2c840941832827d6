"""Per-request response connection and streamed body source.

A ``ResponseConnection`` plays the role of the HTTP response while a view is
running: headers and the status are written to it, a body is written or a
``ReadStream`` is piped into it, and it is ended exactly once. The view then
returns ``connection.to_response()`` to Flask.
"""

import logging
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Union

from flask import Response
from werkzeug.datastructures import Headers

from s3routes.config import STREAM_CHUNK_SIZE

logger = logging.getLogger(__name__)


class ResponseState(Enum):
    """Lifecycle of a response connection."""
    PENDING = "pending"
    HEADERS_SENT = "headers_sent"
    ENDED = "ended"


class ResponseConnectionError(Exception):
    """Base class for response connection misuse."""


class HeadersAlreadySent(ResponseConnectionError):
    """Headers or status written after the status line went out."""


class ResponseEnded(ResponseConnectionError):
    """Body written after the connection was ended."""


class StreamAborted(Exception):
    """A streamed body stopped before its end of data."""


class S3Response(Response):
    """Werkzeug response that never invents a Content-Type."""
    default_mimetype = None


class ReadStream:
    """Readable byte source with end-of-data and abort signals.

    Wraps either an iterable of byte chunks or a file-like object with
    ``read()``. Iterating the stream yields its chunks; once the source is
    drained the ``on_end`` callbacks run. Closing the stream before that, or
    an exception from the source, runs the ``on_abort`` callbacks instead.
    The underlying source is closed in both cases.
    """

    def __init__(self, source: Union[Iterable[bytes], object], chunk_size: int = STREAM_CHUNK_SIZE):
        self.source = source
        self.chunk_size = chunk_size
        self.ended = False
        self.aborted = False
        self._end_callbacks: List[Callable[[], None]] = []
        self._abort_callbacks: List[Callable[[Exception], None]] = []
        self._iterating = False

    def on_end(self, callback: Callable[[], None]) -> 'ReadStream':
        self._end_callbacks.append(callback)
        return self

    def on_abort(self, callback: Callable[[Exception], None]) -> 'ReadStream':
        self._abort_callbacks.append(callback)
        return self

    def pipe(self, sink: 'ResponseConnection') -> 'ResponseConnection':
        """Make this stream the payload source of ``sink`` without ending it."""
        sink.attach(self)
        return sink

    def _chunks(self) -> Iterator[bytes]:
        read = getattr(self.source, 'read', None)
        if read is not None:
            while True:
                chunk = read(self.chunk_size)
                if not chunk:
                    return
                yield chunk
        else:
            yield from self.source

    def __iter__(self) -> Iterator[bytes]:
        if self._iterating or self.ended or self.aborted:
            raise RuntimeError("ReadStream can only be consumed once")
        self._iterating = True
        try:
            for chunk in self._chunks():
                if isinstance(chunk, str):
                    chunk = chunk.encode('utf-8')
                if chunk:
                    yield chunk
        except Exception as e:
            self._abort(e)
            raise
        self._finish()

    def close(self):
        """Release the source; aborts the stream if it has not ended."""
        if not self.ended and not self.aborted:
            self._abort(StreamAborted("stream closed before end of data"))

    def _finish(self):
        self.ended = True
        self._close_source()
        for callback in self._end_callbacks:
            callback()

    def _abort(self, error: Exception):
        self.aborted = True
        self._close_source()
        for callback in self._abort_callbacks:
            callback(error)

    def _close_source(self):
        close = getattr(self.source, 'close', None)
        if close is not None:
            try:
                close()
            except Exception as e:
                logger.error(f"Error closing stream source: {str(e)}")


class ResponseConnection:
    """One request's response, written once and ended once."""

    def __init__(self):
        self.state = ResponseState.PENDING
        self.status: Optional[int] = None
        self.headers = Headers()
        self._chunks: List[bytes] = []
        self._stream: Optional[ReadStream] = None

    @property
    def headers_sent(self) -> bool:
        return self.state is not ResponseState.PENDING

    @property
    def ended(self) -> bool:
        return self.state is ResponseState.ENDED

    @property
    def body(self) -> bytes:
        """Buffered payload written so far (excludes a piped stream)."""
        return b''.join(self._chunks)

    def set_header(self, name: str, value):
        if self.headers_sent:
            raise HeadersAlreadySent(f"Cannot set header {name}: headers already sent")
        self.headers[name] = str(value)

    def write_head(self, status: int, headers: Optional[dict] = None):
        if self.headers_sent:
            raise HeadersAlreadySent(f"Cannot write status {status}: headers already sent")
        for name, value in (headers or {}).items():
            self.headers[name] = str(value)
        self.status = status
        self.state = ResponseState.HEADERS_SENT

    def write(self, chunk: Union[str, bytes], encoding: str = 'utf-8'):
        if self.ended:
            raise ResponseEnded("Cannot write to an ended response")
        if not self.headers_sent:
            self.write_head(200)
        if isinstance(chunk, str):
            chunk = chunk.encode(encoding)
        self._chunks.append(chunk)

    def attach(self, stream: ReadStream):
        if self.ended:
            raise ResponseEnded("Cannot attach a stream to an ended response")
        if not self.headers_sent:
            self.write_head(200)
        self._stream = stream

    def end(self, chunk: Union[str, bytes, None] = None, encoding: str = 'utf-8') -> bool:
        """Finish the response. Returns False if it was already finished."""
        if self.ended:
            logger.warning("Ignoring second end of an already ended response")
            return False
        if chunk:
            self.write(chunk, encoding)
        if not self.headers_sent:
            self.write_head(200)
        self.state = ResponseState.ENDED
        return True

    def _iter_body(self) -> Iterator[bytes]:
        yield from self._chunks
        if self._stream is not None:
            yield from self._stream

    def to_response(self) -> S3Response:
        """Render the connection as the Werkzeug response a view returns."""
        if self._stream is None:
            response = S3Response(self.body, status=self.status or 200, headers=self.headers.copy())
        else:
            response = S3Response(self._iter_body(), status=self.status or 200, headers=self.headers.copy())
            response.call_on_close(self._stream.close)
        return response

"""Response finalization for S3-compatible APIs."""

import json
from concurrent.futures import Future
from typing import Mapping, Optional, Union

from werkzeug.datastructures import Headers

from s3routes.config import SERVER_NAME
from s3routes.connection import ReadStream, ResponseConnection, StreamAborted

Body = Union[None, str, bytes, ReadStream]


class ResponseFinalizer:
    """Shared tail of every response: common headers, status, body, end."""

    def __init__(self, server_name: str = SERVER_NAME):
        self.server_name = server_name

    def set_common_headers(self, headers: Optional[Mapping[str, str]],
                           connection: ResponseConnection, log) -> ResponseConnection:
        """Set response headers plus the server and request id headers.

        Headers with an empty value are skipped. Values are validated before
        any of them reaches the connection, so a ValueError leaves it untouched.
        """
        staged = Headers()
        if headers:
            log.debug(f"Setting response headers: {json.dumps(dict(headers), default=str)}")
            for key, value in headers.items():
                if value:
                    staged[key] = str(value)
        for key, value in staged.items():
            connection.set_header(key, value)
        connection.set_header('server', self.server_name)
        connection.set_header('x-amz-id-2', log.get_serialized_uids())
        connection.set_header('x-amz-request-id', log.get_serialized_uids())
        return connection

    def finalize(self, connection: ResponseConnection, log, status: int,
                 headers: Optional[Mapping[str, str]] = None, body: Body = None,
                 head_headers: Optional[Mapping[str, str]] = None
                 ) -> Union[ResponseConnection, Future]:
        """Write headers and status, then the body, then end the connection.

        Args:
            connection: Response connection for this request
            log: RequestLogger for this request
            status (int): HTTP status code
            headers (Mapping): Headers to set; empty values are dropped
            body: None, a buffered payload, or a ReadStream
            head_headers (Mapping): Headers written together with the status

        Returns:
            The connection for buffered bodies. For a ReadStream, a Future that
            resolves to the connection once the stream ends, or fails with
            StreamAborted if it stops early.
        """
        self.set_common_headers(headers, connection, log)
        log.debug(f"HttpCode: {status}")
        connection.write_head(status, dict(head_headers or {}))

        if isinstance(body, ReadStream):
            return self._finalize_stream(body, connection, log)

        connection.end(body)
        log.info('Response ended')
        return connection

    def _finalize_stream(self, stream: ReadStream, connection: ResponseConnection, log) -> Future:
        completion = Future()
        completion.set_running_or_notify_cancel()

        def stream_ended():
            connection.end()
            log.info('Response ended')
            completion.set_result(connection)

        def stream_aborted(error):
            log.warning(f"Stream aborted before end of data: {str(error)}")
            connection.end()
            if not completion.done():
                completion.set_exception(
                    error if isinstance(error, StreamAborted) else StreamAborted(str(error))
                )

        stream.on_end(stream_ended).on_abort(stream_aborted)
        stream.pipe(connection)
        return completion

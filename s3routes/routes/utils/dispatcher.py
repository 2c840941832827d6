"""Response dispatch for S3-compatible APIs.

Each operation answers one request: with an error document when an error code
is given, otherwise with the success shape of that operation. Nothing is
written once the connection has started responding.
"""

from concurrent.futures import Future
from typing import Mapping, Optional

from s3routes.connection import ReadStream, ResponseConnection
from .errors import ErrorTranslator
from .headers import find_invalid_header, merge_overrides
from .response import ResponseFinalizer
from .xml import XML_CONTENT_TYPE

INVALID_ARGUMENT = 'InvalidArgument'


class ResponseDispatcher:
    """Select and send the response for a request outcome."""

    def __init__(self, translator: Optional[ErrorTranslator] = None,
                 finalizer: Optional[ResponseFinalizer] = None):
        self.translator = translator or ErrorTranslator()
        self.finalizer = finalizer or ResponseFinalizer()

    def error_xml_response(self, error_code: str, connection: ResponseConnection, log) -> ResponseConnection:
        """Send the XML error document for ``error_code``."""
        log.info(f"Sending error XML response for error: {error_code}")
        document, status = self.translator.translate(error_code)
        document.request_id = log.get_serialized_uids()
        xml = document.to_xml()
        log.debug(f"Error XML: {xml}")
        return self.finalizer.finalize(
            connection, log, status,
            body=xml,
            head_headers={'Content-Type': XML_CONTENT_TYPE}
        )

    def header_error(self, headers: Optional[Mapping[str, str]], log) -> Optional[str]:
        """Error code for a header set that cannot be sent as is."""
        name = find_invalid_header(headers)
        if name is None:
            return None
        log.warning(f"Rejecting response header {name}: value contains a line break")
        return INVALID_ARGUMENT

    def respond_body(self, error_code: Optional[str], xml: Optional[str],
                     connection: ResponseConnection, log) -> Optional[ResponseConnection]:
        """Respond with an XML body (success) or an XML error document."""
        if connection.headers_sent:
            log.debug("Headers already sent, skipping XML body response")
            return None
        if error_code:
            return self.error_xml_response(error_code, connection, log)
        log.info("Sending success XML response")
        log.debug(f"XML response: {xml}")
        return self.finalizer.finalize(
            connection, log, 200,
            body=xml,
            head_headers={'Content-Type': XML_CONTENT_TYPE}
        )

    def respond_no_body(self, error_code: Optional[str], headers: Optional[Mapping[str, str]],
                        connection: ResponseConnection, log,
                        http_code: int = 200) -> Optional[ResponseConnection]:
        """Respond with headers only, or with an XML error document."""
        if connection.headers_sent:
            log.debug("Headers already sent, skipping header response")
            return None
        error_code = error_code or self.header_error(headers, log)
        if error_code:
            return self.error_xml_response(error_code, connection, log)
        log.info("Sending success header response")
        return self.finalizer.finalize(connection, log, http_code, headers=headers)

    def respond_content_headers(self, error_code: Optional[str],
                                override_params: Optional[Mapping[str, str]],
                                base_headers: Optional[Mapping[str, str]],
                                connection: ResponseConnection, log) -> Optional[ResponseConnection]:
        """Respond to an object HEAD-style request with overridable headers."""
        if connection.headers_sent:
            log.debug("Headers already sent, skipping content headers response")
            return None
        headers = merge_overrides(override_params, base_headers)
        error_code = error_code or self.header_error(headers, log)
        if error_code:
            return self.error_xml_response(error_code, connection, log)
        log.info("Sending success content headers response")
        return self.finalizer.finalize(connection, log, 200, headers=headers)

    def respond_stream_data(self, error_code: Optional[str],
                            override_params: Optional[Mapping[str, str]],
                            base_headers: Optional[Mapping[str, str]],
                            stream: Optional[ReadStream],
                            connection: ResponseConnection, log) -> Optional[Future]:
        """Respond with object data streamed from ``stream``.

        Returns a Future that completes when the response has ended, or None
        when the connection was already responding. On the error path, and
        when there is no stream to send, the Future is already done and the
        stream is closed unread.
        """
        if connection.headers_sent:
            log.debug("Headers already sent, skipping stream response")
            if stream is not None:
                stream.close()
            return None
        headers = merge_overrides(override_params, base_headers)
        error_code = error_code or self.header_error(headers, log)
        completion = Future()
        if error_code:
            if stream is not None:
                stream.close()
            completion.set_result(self.error_xml_response(error_code, connection, log))
            return completion
        if stream is None:
            log.info("Sending success content headers response without data")
            completion.set_result(self.finalizer.finalize(connection, log, 200, headers=headers))
            return completion
        log.info("Sending success stream response")
        try:
            return self.finalizer.finalize(connection, log, 200, headers=headers, body=stream)
        except Exception:
            stream.close()
            raise

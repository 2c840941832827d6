"""Unit tests for the request logger."""
import logging
import re

from s3routes.config import UPSTREAM_UIDS_HEADER
from s3routes.logger import RequestLogger, generate_request_id


def test_generate_request_id():
    request_id = generate_request_id()
    assert re.fullmatch(r'[0-9A-F]{16}', request_id)
    assert generate_request_id() != request_id


def test_new_logger_has_one_uid():
    log = RequestLogger(logging.getLogger('tests.logger'))
    assert len(log.uids) == 1
    assert log.get_serialized_uids() == log.uids[0]


def test_uid_chain_is_continued():
    log = RequestLogger.from_serialized_uids(logging.getLogger('tests.logger'), 'upstream1:upstream2')
    assert log.uids[:2] == ['upstream1', 'upstream2']
    assert len(log.uids) == 3
    assert log.get_serialized_uids().startswith('upstream1:upstream2:')


def test_from_headers_without_request_id():
    log = RequestLogger.from_headers(logging.getLogger('tests.logger'), {})
    assert len(log.uids) == 1


def test_from_headers_with_upstream_uids():
    log = RequestLogger.from_headers(
        logging.getLogger('tests.logger'), {UPSTREAM_UIDS_HEADER: 'ABC:DEF'}
    )
    assert log.uids[:2] == ['ABC', 'DEF']
    assert len(log.uids) == 3


def test_from_headers_ignores_client_request_id():
    log = RequestLogger.from_headers(
        logging.getLogger('tests.logger'), {'x-amz-request-id': 'client-chosen'}
    )
    assert len(log.uids) == 1
    assert 'client-chosen' not in log.get_serialized_uids()


def test_from_headers_drops_malformed_uids():
    log = RequestLogger.from_headers(
        logging.getLogger('tests.logger'),
        {UPSTREAM_UIDS_HEADER: 'GOOD1:<script>:bad id:' + 'x' * 65}
    )
    assert log.uids[0] == 'GOOD1'
    assert len(log.uids) == 2


def test_messages_carry_uids(caplog):
    log = RequestLogger(logging.getLogger('tests.logger'))
    with caplog.at_level(logging.INFO, logger='tests.logger'):
        log.info('Response ended')
    record = caplog.records[-1]
    assert record.getMessage() == f"[{log.get_serialized_uids()}] Response ended"
    assert record.req_uids == log.get_serialized_uids()

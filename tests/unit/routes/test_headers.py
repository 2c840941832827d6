"""Unit tests for response header overrides."""

import pytest
from werkzeug.datastructures import MultiDict

from s3routes.routes.utils.headers import (
    OVERRIDE_HEADERS,
    extract_override_params,
    find_invalid_header,
    merge_overrides
)

BASE_HEADERS = {
    'Content-Type': 'application/octet-stream',
    'Content-Language': 'en',
    'Expires': 'Thu, 01 Dec 1994 16:00:00 GMT',
    'Cache-Control': 'no-cache',
    'Content-Disposition': 'inline',
    'Content-Encoding': 'identity',
    'ETag': '"d41d8cd98f00b204e9800998ecf8427e"',
}


@pytest.mark.parametrize('param,header', list(OVERRIDE_HEADERS.items()))
def test_override_replaces_baseline(param, header):
    """Each recognised parameter overrides its header."""
    headers = merge_overrides({param: 'override-value'}, BASE_HEADERS)
    assert headers[header] == 'override-value'
    for other in OVERRIDE_HEADERS.values():
        if other != header:
            assert headers[other] == BASE_HEADERS[other]


def test_mapping_covers_six_headers():
    assert OVERRIDE_HEADERS == {
        'response-content-type': 'Content-Type',
        'response-content-language': 'Content-Language',
        'response-expires': 'Expires',
        'response-cache-control': 'Cache-Control',
        'response-content-disposition': 'Content-Disposition',
        'response-content-encoding': 'Content-Encoding',
    }


def test_absent_overrides_keep_baseline():
    assert merge_overrides({}, BASE_HEADERS) == BASE_HEADERS


def test_empty_override_values_are_ignored():
    headers = merge_overrides({'response-content-type': ''}, BASE_HEADERS)
    assert headers['Content-Type'] == 'application/octet-stream'


def test_unrecognised_params_are_ignored():
    headers = merge_overrides(
        {'response-x-custom': 'nope', 'Content-Type': 'text/html', 'versionId': '3'},
        BASE_HEADERS
    )
    assert headers == BASE_HEADERS


def test_base_headers_not_mutated():
    base = {'Content-Type': 'application/xml'}
    headers = merge_overrides({'response-content-type': 'text/plain'}, base)
    assert headers == {'Content-Type': 'text/plain'}
    assert base == {'Content-Type': 'application/xml'}
    assert headers is not base


def test_override_adds_missing_header():
    headers = merge_overrides({'response-expires': '0'}, {'ETag': '"x"'})
    assert headers == {'ETag': '"x"', 'Expires': '0'}


def test_none_inputs_yield_empty_set():
    assert merge_overrides(None, None) == {}


def test_extract_override_params_from_query_args():
    args = MultiDict([
        ('response-content-type', 'text/plain'),
        ('response-cache-control', ''),
        ('versionId', 'v1'),
    ])
    assert extract_override_params(args) == {'response-content-type': 'text/plain'}


@pytest.mark.parametrize('value', ['a\nb', 'a\rb', 'text/plain\r\nX-Injected: 1'])
def test_find_invalid_header_reports_line_breaks(value):
    headers = merge_overrides({'response-content-disposition': value}, BASE_HEADERS)
    assert find_invalid_header(headers) == 'Content-Disposition'


def test_find_invalid_header_accepts_plain_values():
    assert find_invalid_header(BASE_HEADERS) is None
    assert find_invalid_header({'x-amz-version-id': '', 'Content-Length': 0}) is None
    assert find_invalid_header(None) is None

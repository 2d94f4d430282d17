"""Unit tests for `POST /short` payload parsing in payload.py.

Test coverage includes:

1. Form parsing
   - url-encoded and multipart bodies, API Gateway base64 bodies, unparsable bodies.

2. Base64 decoding
   - standard and URL-safe alphabets, missing padding, '+' mangled into ' '.

3. Long URL extraction
   - every validation step and its user-facing message and status code.
"""

import base64
from typing import cast

import pytest
from pytest import MonkeyPatch

from shortlink.constants import Limits
from shortlink.exceptions import ValidationError, PayloadTooLargeError
from shortlink.types import LambdaEvent
from shortlink.utils.payload import parse_form, decode_base64_url, is_http_url, extract_long_url


def raw_event(body: str | bytes, content_type: str = 'application/x-www-form-urlencoded', encoded: bool = False) -> LambdaEvent:
    if encoded:
        body = base64.b64encode(body if isinstance(body, bytes) else body.encode('utf-8')).decode('ascii')
    return cast(LambdaEvent, {'headers': {'content-type': content_type}, 'body': body, 'isBase64Encoded': encoded})


# -------------------------------
# 1. Form parsing
# -------------------------------


def test_parse_form_urlencoded():
    assert parse_form(raw_event('longUrl=abc%2Bdef&x=1&x=2')) == {'longUrl': 'abc+def', 'x': '1'}


def test_parse_form_empty_body():
    assert parse_form({'headers': {}, 'body': None}) == {}


def test_parse_form_base64_encoded_body():
    assert parse_form(raw_event('longUrl=aHR0cHM6Ly9leGFtcGxlLmNvbQ', encoded=True)) == {'longUrl': 'aHR0cHM6Ly9leGFtcGxlLmNvbQ'}


def test_parse_form_multipart():
    body = (
        '--XyZ\r\n'
        'Content-Disposition: form-data; name="longUrl"\r\n'
        '\r\n'
        'aHR0cHM6Ly9leGFtcGxlLmNvbQ==\r\n'
        '--XyZ\r\n'
        'Content-Disposition: form-data; name="upload"; filename="a.txt"\r\n'
        'Content-Type: text/plain\r\n'
        '\r\n'
        'ignored\r\n'
        '--XyZ--\r\n'
    )
    form = parse_form(raw_event(body, content_type='multipart/form-data; boundary=XyZ'))
    assert form == {'longUrl': 'aHR0cHM6Ly9leGFtcGxlLmNvbQ=='}


@pytest.mark.parametrize(
    'event',
    [
        # API Gateway claims base64 but the body isn't
        {'headers': {}, 'body': 'not base64!!!', 'isBase64Encoded': True},
        # Not UTF-8
        raw_event(b'longUrl=\xff\xfe', encoded=True),
    ],
)
def test_parse_form_invalid(event: LambdaEvent):
    with pytest.raises(ValidationError, match='Invalid form-data'):
        parse_form(event)


# -------------------------------
# 2. Base64 decoding
# -------------------------------


@pytest.mark.parametrize(
    'encoded',
    [
        'aHR0cHM6Ly9leGFtcGxlLmNvbQ==',
        'aHR0cHM6Ly9leGFtcGxlLmNvbQ',
        '  aHR0cHM6Ly9leGFtcGxlLmNvbQ==\n',
        'aHR0cHM6Ly9l\r\neGFtcGxlLmNvbQ==',
    ],
)
def test_decode_base64_url(encoded: str):
    assert decode_base64_url(encoded) == 'https://example.com'


def test_decode_base64_url_standard_and_urlsafe():
    # 'https://example.com/?' is 21 bytes, so '~~~' encodes to its own 'fn5+' quantum
    url = 'https://example.com/?~~~'
    standard = base64.b64encode(url.encode()).decode()
    urlsafe = base64.urlsafe_b64encode(url.encode()).decode().rstrip('=')

    assert standard.endswith('fn5+')
    assert urlsafe.endswith('fn5-')
    assert decode_base64_url(standard) == url
    assert decode_base64_url(urlsafe) == url
    # '+' that form decoding turned into ' '
    assert decode_base64_url(standard.replace('+', ' ')) == url


def test_decode_base64_url_utf8():
    url = 'https://例え.jp/パス'
    assert decode_base64_url(base64.b64encode(url.encode('utf-8')).decode()) == url


@pytest.mark.parametrize('encoded', ['!!!!', 'a', '//79'])
def test_decode_base64_url_invalid(encoded: str):
    with pytest.raises(ValueError):
        decode_base64_url(encoded)


@pytest.mark.parametrize(
    'url, expected',
    [
        ('https://example.com', True),
        ('http://example.com:8080/path?q=1#frag', True),
        ('HTTPS://EXAMPLE.COM', True),
        ('ftp://example.com', False),
        ('javascript:alert(1)', False),
        ('example.com', False),
        ('https://', False),
        ('http://example.com:99999', False),
        ('', False),
        ('https://example.com/\r\nSet-Cookie: session=evil', False),
        ('https://example.com/\nLocation: https://evil.example', False),
        ('https://exa\tmple.com', False),
        ('https://example.com/a b', False),
        ('https://example.com/\x00', False),
        ('https://example.com/\u2028', False),
        ('https://example.com/caf\u00e9', True),
    ],
)
def test_is_http_url(url: str, expected: bool):
    assert is_http_url(url) is expected


# -------------------------------
# 3. Long URL extraction
# -------------------------------


def test_extract_long_url(form_event, b64):
    assert extract_long_url(form_event({'longUrl': b64('https://example.com/page?x=1')})) == 'https://example.com/page?x=1'


def test_extract_long_url_raw_plus_in_body(b64):
    encoded = b64('https://example.com/?~~~')
    assert extract_long_url(raw_event(f'longUrl={encoded}')) == 'https://example.com/?~~~'


@pytest.mark.parametrize(
    'fields, message',
    [
        ({}, 'Missing longUrl'),
        ({'longUrl': ''}, 'Missing longUrl'),
        ({'longUrl': '   '}, 'Missing longUrl'),
        ({'url': 'aHR0cHM6Ly9leGFtcGxlLmNvbQ'}, 'Missing longUrl'),
        ({'longUrl': '%%%not-base64%%%'}, 'Invalid base64 longUrl'),
        ({'longUrl': '//79'}, 'Invalid base64 longUrl'),  # valid base64, not UTF-8
    ],
)
def test_extract_long_url_bad_request(form_event, fields: dict[str, str], message: str):
    with pytest.raises(ValidationError, match=message) as exc_info:
        extract_long_url(form_event(fields))
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize(
    'url',
    [
        'ftp://example.com',
        'mailto:someone@example.com',
        'not a url',
        'https://',
        'https://example.com/\r\nSet-Cookie: session=evil',
    ],
)
def test_extract_long_url_not_http(form_event, b64, url: str):
    with pytest.raises(ValidationError, match='Decoded longUrl is not a valid http/https URL') as exc_info:
        extract_long_url(form_event({'longUrl': b64(url)}))
    assert exc_info.value.status_code == 400


def test_extract_long_url_encoded_too_large(form_event):
    with pytest.raises(PayloadTooLargeError, match='longUrl too large') as exc_info:
        extract_long_url(form_event({'longUrl': 'A' * (Limits.MAX_ENCODED_URL_LENGTH + 1)}))
    assert exc_info.value.status_code == 413


def test_extract_long_url_at_size_limit(form_event, b64):
    url = 'https://example.com/' + 'a' * 6000
    encoded = b64(url)
    assert len(encoded) <= Limits.MAX_ENCODED_URL_LENGTH
    assert extract_long_url(form_event({'longUrl': encoded})) == url


def test_extract_long_url_decoded_too_large(monkeypatch: MonkeyPatch, form_event, b64):
    monkeypatch.setattr(Limits, 'MAX_DECODED_URL_LENGTH', 20)

    with pytest.raises(PayloadTooLargeError, match='Decoded URL too large') as exc_info:
        extract_long_url(form_event({'longUrl': b64('https://example.com/page')}))
    assert exc_info.value.status_code == 413


def test_extract_long_url_invalid_form():
    with pytest.raises(ValidationError, match='Invalid form-data'):
        extract_long_url({'headers': {}, 'body': 'not base64!!!', 'isBase64Encoded': True})

"""Parsing and validation of the `POST /short` request payload.

The client sends the long URL base64 encoded (standard or URL-safe alphabet,
padding optional) in the `longUrl` field of a form body. This module turns
an API Gateway event into a validated long URL or raises a ValidationError
describing what is wrong with it.

Functions:
    parse_form(event) -> dict[str, str]
    decode_base64_url(encoded) -> str
    is_http_url(url) -> bool
    extract_long_url(event) -> str
"""

import re
import base64
import binascii
from email.parser import BytesParser
from email.policy import HTTP
from typing import Any
from urllib.parse import parse_qs, urlsplit

from shortlink.constants import Limits
from shortlink.exceptions import ValidationError, PayloadTooLargeError
from shortlink.utils.helpers import get_header


LONG_URL_FIELD = 'longUrl'

# Stored URLs are sent back verbatim as the Location header
UNSAFE_URL_CHARS = re.compile(r'[\x00-\x20\x7f-\x9f\s]')


def _raw_body(event: dict[str, Any]) -> bytes:
    body = event.get('body') or ''
    if event.get('isBase64Encoded'):
        return base64.b64decode(body)
    return body.encode('utf-8') if isinstance(body, str) else bytes(body)


def _parse_multipart(content_type: str, body: bytes) -> dict[str, str]:
    message = BytesParser(policy=HTTP).parsebytes(b'Content-Type: ' + content_type.encode('latin-1') + b'\r\n\r\n' + body)
    if not message.is_multipart():
        raise ValueError('multipart body without parts')

    fields = {}
    for part in message.iter_parts():
        name = part.get_param('name', header='content-disposition')
        if name and part.get_filename() is None:
            fields.setdefault(name, part.get_content().strip('\r\n') if part.get_content_maintype() == 'text' else '')
    return fields


def parse_form(event: dict[str, Any]) -> dict[str, str]:
    """Parse a url-encoded or multipart form body into a flat dict (first value wins)

    Raises:
        ValidationError: if the body can't be decoded as a form.
    """
    content_type = get_header(event, 'content-type') or ''
    try:
        body = _raw_body(event)
        if content_type.lower().startswith('multipart/form-data'):
            return _parse_multipart(content_type, body)
        parsed = parse_qs(body.decode('utf-8'), keep_blank_values=True, strict_parsing=False)
    except (ValueError, UnicodeDecodeError, binascii.Error) as e:
        raise ValidationError('Invalid form-data') from e
    return {key: values[0] for key, values in parsed.items()}


def decode_base64_url(encoded: str) -> str:
    """Decode standard or URL-safe base64 (padding optional) into a UTF-8 string

    A space can't appear in base64, so spaces are read back as the '+' that
    form decoding turned them into. Line breaks are dropped.

    Example:
        >>> decode_base64_url('aHR0cHM6Ly9leGFtcGxlLmNvbQ')
        'https://example.com'

    Raises:
        ValueError: if the input is not valid base64 or not valid UTF-8.
    """
    normalized = ''.join(encoded.strip().replace(' ', '+').split())
    normalized = normalized.replace('-', '+').replace('_', '/')
    normalized += '=' * (-len(normalized) % 4)
    return base64.b64decode(normalized, validate=True).decode('utf-8')


def is_http_url(url: str) -> bool:
    """Return True if `url` is an absolute http(s) URL with a host

    URLs containing whitespace or control characters are rejected: urlsplit
    silently strips tabs and line breaks, so it would accept them.

    Example:
        >>> is_http_url('https://example.com/\\r\\nSet-Cookie: a=b')
        False
    """
    if UNSAFE_URL_CHARS.search(url):
        return False
    try:
        components = urlsplit(url)
        # Accessing .port validates it
        components.port
    except ValueError:
        return False
    return components.scheme in {'http', 'https'} and bool(components.hostname)


def extract_long_url(event: dict[str, Any]) -> str:
    """Extract and validate the long URL from a `POST /short` event

    Checks run in this order, the first failure wins:
        1. body parses as a form                   -> 400 Invalid form-data
        2. `longUrl` present and non-blank         -> 400 Missing longUrl
        3. encoded length <= 8192                  -> 413 longUrl too large
        4. base64 decodes to UTF-8                 -> 400 Invalid base64 longUrl
        5. decoded length <= 8192                  -> 413 Decoded URL too large
        6. decoded value is an http(s) URL         -> 400 Decoded longUrl is not a valid http/https URL

    Returns:
        str: the decoded long URL, verbatim.

    Raises:
        ValidationError / PayloadTooLargeError
    """
    form = parse_form(event)

    encoded = form.get(LONG_URL_FIELD)
    if not isinstance(encoded, str) or not encoded.strip():
        raise ValidationError('Missing longUrl')
    if len(encoded) > Limits.MAX_ENCODED_URL_LENGTH:
        raise PayloadTooLargeError('longUrl too large')

    try:
        long_url = decode_base64_url(encoded)
    except (ValueError, binascii.Error) as e:
        raise ValidationError('Invalid base64 longUrl') from e

    if len(long_url) > Limits.MAX_DECODED_URL_LENGTH:
        raise PayloadTooLargeError('Decoded URL too large')
    if not is_http_url(long_url):
        raise ValidationError('Decoded longUrl is not a valid http/https URL')

    return long_url

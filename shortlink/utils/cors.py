"""CORS policy for the link creation endpoint

Modes (CORS_MODE):
    open  - any origin may read responses (wildcard, no credentials)
    list  - only origins in CORS_ORIGINS; the origin is echoed with `Vary: Origin`
    off   - no CORS headers at all

The decision is stateless: it only depends on the request headers and settings.
"""

from typing import Any

from shortlink.constants import CorsMode
from shortlink.utils.config import Settings
from shortlink.utils.helpers import get_header


ALLOWED_METHODS = 'POST, OPTIONS'
DEFAULT_ALLOWED_HEADERS = 'Content-Type'
MAX_AGE_SECONDS = 86400


def cors_headers(event: dict[str, Any], settings: Settings) -> dict[str, str]:
    """Return the CORS headers to attach to a response for this request

    Example:
        >>> cors_headers({'headers': {}}, Settings(cors_mode='open'))['Access-Control-Allow-Origin']
        '*'
    """
    if settings.cors_mode == CorsMode.OFF:
        return {}

    requested_headers = get_header(event, 'access-control-request-headers')
    common = {
        'Access-Control-Allow-Credentials': 'false',
        'Access-Control-Allow-Methods': ALLOWED_METHODS,
        'Access-Control-Allow-Headers': requested_headers or DEFAULT_ALLOWED_HEADERS,
        'Access-Control-Max-Age': str(MAX_AGE_SECONDS),
    }

    if settings.cors_mode == CorsMode.OPEN:
        return {'Access-Control-Allow-Origin': '*', **common}

    origin = get_header(event, 'origin') or ''
    if not origin or origin not in settings.cors_origins:
        return {}
    return {'Access-Control-Allow-Origin': origin, 'Vary': 'Origin', **common}


def with_cors(event: dict[str, Any], response: dict[str, Any], settings: Settings) -> dict[str, Any]:
    """Merge CORS headers into an API Gateway response (returns the same dict)"""
    headers = cors_headers(event, settings)
    if headers:
        response['headers'] = {**(response.get('headers') or {}), **headers}
    return response

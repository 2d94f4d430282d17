"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    get_header() -> str | None
        Case-insensitive header lookup on an API Gateway event
    client_address() -> str
        Best-effort client IP address of the caller
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(func) -> Callable
        Decorator: Turn any uncaught handler exception into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from shortlink.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from shortlink.constants import Defaults, UNKNOWN_INTERNAL_SERVER_ERROR
from shortlink.exceptions import MissingEnvironmentVariableError
from shortlink.utils.runtime import running_locally


logger = logging.getLogger(__name__)

# Headers set by a trusted proxy in front of the API, most trusted first
REAL_IP_HEADERS = ('cf-connecting-ip', 'x-real-ip')
LOCAL_HOSTS = ('localhost', '127.0.0.1')


def base_url(event: dict[str, Any], configured: str | None = None) -> str:
    """Extract public base URL from API Gateway event

    A configured base URL (e.g. BASE_URL) always wins. Otherwise the URL is
    derived from the host that served the request: if a custom domain is
    configured, the stage name is omitted; on the default AWS execute-api
    domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler
        configured (str | None): explicitly configured base URL

    Returns:
        str: Base URL without trailing slash, e.g.:
             - "https://s.example.com"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    if configured:
        return configured.rstrip('/')

    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain.startswith(LOCAL_HOSTS):
        # SAM local serves plain HTTP
        return f'http://{domain}'
    elif domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(shortcode: str, event: dict[str, Any], configured: str | None = None) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        event (dict): API Gateway event object passed to Lambda handler
        configured (str | None): explicitly configured base URL

    Returns:
        str: short url string representation
    """
    return f'{base_url(event, configured).rstrip("/")}/{shortcode}'


def get_header(event: dict[str, Any], name: str) -> str | None:
    """Look up a request header by name, ignoring case

    API Gateway forwards headers with whatever casing the client used.
    """
    name = name.lower()
    for key, value in (event.get('headers') or {}).items():
        if key.lower() == name:
            return value
    return None


def client_address(event: dict[str, Any]) -> str:
    """Return the best-effort client IP address for rate limiting

    Resolution order:
        1. trusted proxy "real IP" headers (CF-Connecting-IP, X-Real-IP)
        2. first hop of X-Forwarded-For
        3. API Gateway source IP
        4. Defaults.FALLBACK_CLIENT_ADDRESS

    Example:
        >>> client_address({'headers': {'X-Forwarded-For': '203.0.113.7, 10.0.0.1'}})
        '203.0.113.7'
    """
    for header in REAL_IP_HEADERS:
        value = (get_header(event, header) or '').strip()
        if value:
            return value

    forwarded_for = (get_header(event, 'x-forwarded-for') or '').split(',')[0].strip()
    if forwarded_for:
        return forwarded_for

    source_ip = ((event.get('requestContext') or {}).get('identity') or {}).get('sourceIp')
    return source_ip or Defaults.FALLBACK_CLIENT_ADDRESS


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('ELASTICACHE_SECRET')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: "Missing required environment variables: 'ELASTICACHE_SECRET'"
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(func: Callable) -> Callable:
    """Decorator: respond with a generic 500 when a lambda handler crashes

    When running locally the original exception is re-raised instead, so it
    shows up in SAM's console.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(func)
    def wrapper(event: dict[str, Any], context: Any, *args, **kwargs) -> dict[str, Any]:
        try:
            return func(event, context, *args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json; charset=utf-8'},
                'body': json.dumps(
                    {
                        'Code': 0,
                        'Message': 'Internal Server Error',
                        'ErrorCode': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper

import logging

from shortlink.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlink.dao.redis import ShortURLRedisDAO
from shortlink.dao.exceptions import ShortURLNotFoundError, DataStoreError
from shortlink.services import Resolver
from shortlink.utils import load_redis_config, app_prefix, is_valid_shortcode, guarantee_500_response
from shortlink.lambdas.redirect_url.constants import (
    MALFORMED_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    STORAGE_UNAVAILABLE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


def response_text(status_code: int, message: str) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'text/plain; charset=utf-8'},
        'body': message,
    }


def response_404() -> LambdaResponse:
    return response_text(404, 'Not Found')


def response_500() -> LambdaResponse:
    return response_text(500, 'Storage unavailable')


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': '',
    }


def extract_shortcode(event: LambdaEvent) -> str | None:
    """Shortcode from the `{shortcode}` path parameter, else the raw path"""
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is None:
        path = event.get('path') or ''
        shortcode = path[1:] if path.startswith('/') else None
    return shortcode


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle `GET|HEAD /{shortcode}` by redirecting to the stored long URL

    HTTP responses:
        302: Location: <long URL>
        404: plain text "Not Found" (unknown or malformed shortcode, other methods)
        500: plain text "Storage unavailable"

    Example:
        >>> response = lambda_handler({'httpMethod': 'GET', 'pathParameters': {'shortcode': 'kX7mQ2p'}}, None)
        >>> response['statusCode'], response['headers']['Location']
        (302, 'https://example.com/my-page')
    """
    method = (event.get('httpMethod') or 'GET').upper()
    shortcode = extract_shortcode(event)

    # Reject junk before opening a connection to the link store
    if method not in ('GET', 'HEAD') or not is_valid_shortcode(shortcode):
        logger.info(
            'Malformed shortcode or unsupported method. Responding with 404.',
            extra={'event': MALFORMED_SHORTCODE, 'method': method},
        )
        return response_404()

    try:
        resolver = Resolver(ShortURLRedisDAO(**load_redis_config(), prefix=app_prefix()))
        target_url = resolver.resolve(shortcode)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'event': SHORT_URL_NOT_FOUND, 'shortcode': shortcode},
        )
        return response_404()
    except DataStoreError:
        logger.exception(
            'Link store unavailable. Responding with 500.',
            extra={'event': STORAGE_UNAVAILABLE, 'shortcode': shortcode},
        )
        return response_500()

    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'event': REDIRECT_SUCCESS, 'shortcode': shortcode},
    )
    return response_302(location=target_url)

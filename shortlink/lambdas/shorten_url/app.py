import json
import logging

from botocore.exceptions import BotoCoreError, ClientError

from shortlink.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlink.models import RateLimitDecision
from shortlink.exceptions import ValidationError, RateLimitedError, AllocationExhaustedError, ConfigurationError
from shortlink.dao.redis import ShortURLRedisDAO, DedupRedisDAO
from shortlink.dao.cache import RateLimitCacheDAO
from shortlink.dao.exceptions import DataStoreError
from shortlink.services import DeduplicationIndex, LinkAllocator, RateLimiter
from shortlink.utils import load_settings, load_redis_config, app_prefix, get_short_url, client_address, guarantee_500_response
from shortlink.utils.config import Settings
from shortlink.utils.cors import with_cors
from shortlink.utils.payload import extract_long_url
from shortlink.lambdas.shorten_url.constants import (
    CORS_PREFLIGHT,
    ROUTE_NOT_FOUND,
    RATE_LIMITED,
    INVALID_LONG_URL,
    ALLOCATION_EXHAUSTED,
    STORAGE_UNAVAILABLE,
    SHORT_LINK_CREATED,
    RATE_LIMIT_REMAINING_HEADER,
    RATE_LIMIT_RESET_IN_HEADER,
)


logger = logging.getLogger(__name__)


def rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    return {
        RATE_LIMIT_RESET_IN_HEADER: str(decision.reset_in),
        RATE_LIMIT_REMAINING_HEADER: str(decision.remaining),
    }


def response_json(status_code: int, body: dict, headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json; charset=utf-8', **(headers or {})},
        'body': json.dumps(body),
    }


def response_error(status_code: int, message: str, headers: dict[str, str] | None = None) -> LambdaResponse:
    return response_json(status_code, {'Code': 0, 'Message': message}, headers)


def response_200(*, short_url: str, decision: RateLimitDecision) -> LambdaResponse:
    return response_json(200, {'Code': 1, 'ShortUrl': short_url}, rate_limit_headers(decision))


def response_204() -> LambdaResponse:
    return {'statusCode': 204, 'headers': {}, 'body': ''}


def response_404() -> LambdaResponse:
    return {
        'statusCode': 404,
        'headers': {'Content-Type': 'text/plain; charset=utf-8'},
        'body': 'Not Found',
    }


def response_429(*, decision: RateLimitDecision) -> LambdaResponse:
    headers = {'Retry-After': str(decision.reset_in), **rate_limit_headers(decision)}
    return response_error(429, 'Rate limited. Please try again later.', headers)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle `POST /short` (create a short link) and its CORS preflight

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Admit the client through the fixed window rate limiter
    - Step 2: Extract and validate the base64 encoded `longUrl` form field
    - Step 3: Allocate a shortcode (dedup hit or fresh, collision checked)
    - Step 4: Respond with the absolute short URL

    HTTP responses:
        200: {"Code": 1, "ShortUrl": "<base>/<shortcode>"} + x-rl-* headers
        204: CORS preflight (OPTIONS)
        400: {"Code": 0, "Message": ...} invalid form, missing/bad base64, non-http(s) URL
        413: {"Code": 0, "Message": ...} encoded or decoded URL too large
        429: {"Code": 0, "Message": ...} rate limited + x-rl-* headers
        500: {"Code": 0, "Message": ...} allocation exhausted or storage unavailable

    Every response carries CORS headers according to CORS_MODE.

    Example:
        >>> event = {'httpMethod': 'POST', 'body': 'longUrl=aHR0cHM6Ly9leGFtcGxlLmNvbQ'}
        >>> response = lambda_handler(event, None)
        >>> json.loads(response['body'])
        {'Code': 1, 'ShortUrl': 'https://s.example.com/kX7mQ2p'}
    """
    settings = load_settings()
    method = (event.get('httpMethod') or '').upper()

    if method == 'OPTIONS':
        logger.debug('Answering CORS preflight.', extra={'event': CORS_PREFLIGHT})
        return with_cors(event, response_204(), settings)

    if method != 'POST':
        logger.info('Unsupported method %s. Responding with 404.', method, extra={'event': ROUTE_NOT_FOUND})
        return response_404()

    return with_cors(event, shorten(event, settings), settings)


def shorten(event: LambdaEvent, settings: Settings) -> LambdaResponse:
    prefix = app_prefix()
    client = client_address(event)

    # 1- Rate limit before looking at the payload
    try:
        decision = RateLimiter(RateLimitCacheDAO(prefix=prefix), settings).enforce(client)
    except RateLimitedError as e:
        logger.info(
            'Client rate limited. Responding with 429.',
            extra={'event': RATE_LIMITED, 'client': client, 'reset_in': e.decision.reset_in},
        )
        return response_429(decision=e.decision)
    except (DataStoreError, ConfigurationError, BotoCoreError, ClientError):
        # Resolving the cache through SSM/Secrets Manager can fail before any Redis call
        logger.exception('Rate limit cache unavailable. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_error(500, 'Storage unavailable')

    # 2- Extract and validate the long URL
    try:
        long_url = extract_long_url(event)
    except ValidationError as e:
        logger.info(
            'Invalid long URL (%s). Responding with %s.',
            e,
            e.status_code,
            extra={'event': INVALID_LONG_URL, 'error_code': e.error_code},
        )
        return response_error(e.status_code, str(e))

    # 3- Allocate a shortcode
    try:
        links_dao = ShortURLRedisDAO(**load_redis_config(), prefix=prefix)
        dedup_dao = DedupRedisDAO(redis_client=links_dao.redis, prefix=prefix)
        allocator = LinkAllocator(links_dao, DeduplicationIndex(dedup_dao, settings), settings)
        shortcode = allocator.allocate(long_url)
    except AllocationExhaustedError:
        logger.error('Failed to allocate a shortcode. Responding with 500.', extra={'event': ALLOCATION_EXHAUSTED})
        return response_error(500, 'Failed to allocate code')
    except DataStoreError:
        logger.exception('Link store unavailable. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_error(500, 'Storage unavailable')

    # 4- Respond with the short URL
    short_url = get_short_url(shortcode, event, settings.base_url)
    logger.info(
        'Short link created. Responding with 200.',
        extra={'event': SHORT_LINK_CREATED, 'shortcode': shortcode, 'remaining': decision.remaining},
    )
    return response_200(short_url=short_url, decision=decision)

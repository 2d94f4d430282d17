import string
from enum import StrEnum


class Shortcode:
    """Shortcode shape."""

    # Letters and digits without the visually ambiguous 0/O and 1/l/I
    ALPHABET = ''.join(c for c in string.ascii_uppercase + string.ascii_lowercase + string.digits if c not in '0O1lI')
    LENGTH = 7
    MAX_ALLOCATION_ATTEMPTS = 6
    # Shape accepted on lookup (wider than what we generate)
    PATTERN = r'[A-Za-z0-9_-]{3,64}'


class Limits:
    """Request payload limits."""

    MAX_ENCODED_URL_LENGTH = 8192
    MAX_DECODED_URL_LENGTH = 8192


class Defaults:
    """Configuration defaults and floors."""

    RL_WINDOW_SEC = 60
    RL_WINDOW_SEC_FLOOR = 10
    RL_MAX_REQ = 10
    RL_MAX_REQ_FLOOR = 1
    CORS_MODE = 'open'
    DEDUP_TTL_SEC = 0  # deduplication disabled
    FALLBACK_CLIENT_ADDRESS = '0.0.0.0'


class CorsMode(StrEnum):
    OPEN = 'open'
    LIST = 'list'
    OFF = 'off'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class Settings(StrEnum):
        BASE_URL = 'BASE_URL'
        RL_WINDOW_SEC = 'RL_WINDOW_SEC'
        RL_MAX_REQ = 'RL_MAX_REQ'
        CORS_MODE = 'CORS_MODE'
        CORS_ORIGINS = 'CORS_ORIGINS'
        DEDUP_TTL_SEC = 'DEDUP_TTL_SEC'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105

    class ElastiCache(StrEnum):
        # SSM parameter paths for ElastiCache connection details
        HOST_PARAM = 'ELASTICACHE_HOST_PARAM'
        PORT_PARAM = 'ELASTICACHE_PORT_PARAM'
        DB_PARAM = 'ELASTICACHE_DB_PARAM'
        USER_PARAM = 'ELASTICACHE_USER_PARAM'
        # Secrets Manager name holding credentials JSON: {"username": "...", "password": "..."}
        SECRET = 'ELASTICACHE_SECRET'  # noqa: S105

    class LocalStack(StrEnum):
        ENDPOINT = 'LOCALSTACK_ENDPOINT'  # usually http://localstack:4566


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'

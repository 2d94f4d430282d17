"""Utility functions for application configuration management.

All configuration is sourced from environment variables (set on each Lambda
function by the deployment template). Handlers build a `Settings` object
once per invocation and inject it into every service they construct, so
services never read the process environment themselves.

Environment variables:

    [Core]
    BASE_URL          Public base URL for returned short links
                      (falls back to the host that served the request)

    [Rate limiting]
    RL_WINDOW_SEC     Fixed window length in seconds (default 60, floor 10)
    RL_MAX_REQ        Max requests per client per window (default 10, floor 1)

    [CORS]
    CORS_MODE         'open' (default) | 'list' | 'off'
    CORS_ORIGINS      Comma separated allow-list, used when CORS_MODE=list

    [Deduplication]
    DEDUP_TTL_SEC     Dedup entry TTL in seconds; <= 0 disables (default)

    [Key-Value store]
    REDIS_HOST, REDIS_PORT, REDIS_DB, REDIS_USERNAME, REDIS_PASSWORD

    [Namespacing]
    APP_NAME, APP_ENV  Key prefix '<APP_NAME>:<APP_ENV>'

Functions:
    app_env() -> str
    app_name() -> str | None
    app_prefix() -> str | None
    load_settings(environ: Mapping[str, str] | None = None) -> Settings
    load_redis_config(environ: Mapping[str, str] | None = None) -> dict

Example:
    >>> from shortlink.utils.config import load_settings
    >>> settings = load_settings({'RL_WINDOW_SEC': '5', 'CORS_MODE': 'LIST'})
    >>> settings.rl_window_sec, settings.cors_mode
    (10, 'list')
"""

import os
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from shortlink.constants import ENV, Defaults
from shortlink.exceptions import BadConfigurationError
from shortlink.types import RedisConfiguration


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shortlink'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shortlink:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@dataclass(frozen=True)
class Settings:
    """Validated, process-wide application settings.

    Attributes:
        base_url (str | None):
            Public base URL for short links, without trailing slash.
        rl_window_sec (int):
            Rate limiter fixed window length in seconds.
        rl_max_req (int):
            Rate limiter max admitted requests per client and window.
        cors_mode (str):
            One of 'open', 'list', 'off'. Unknown modes behave like 'list'.
        cors_origins (frozenset[str]):
            Allowed origins when cors_mode is 'list'.
        dedup_ttl_sec (int):
            Dedup entry TTL in seconds. Deduplication is off when <= 0.
    """

    base_url: str | None = None
    rl_window_sec: int = Defaults.RL_WINDOW_SEC
    rl_max_req: int = Defaults.RL_MAX_REQ
    cors_mode: str = Defaults.CORS_MODE
    cors_origins: frozenset[str] = field(default_factory=frozenset)
    dedup_ttl_sec: int = Defaults.DEDUP_TTL_SEC

    @property
    def dedup_enabled(self) -> bool:
        return self.dedup_ttl_sec > 0


def _parse_int(raw: str | None, default: int) -> int:
    """Parse an integer setting, falling back to the default on junk or 0"""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        if raw not in (None, ''):
            logger.warning('Ignoring non-integer setting value %r, using default %s.', raw, default)
        return default
    return value or default


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build `Settings` from environment variables, applying defaults and floors

    Args:
        environ (Mapping[str, str] | None):
            Source mapping. Defaults to `os.environ`.

    Returns:
        Settings: validated settings.
    """
    env = os.environ if environ is None else environ

    base_url = (env.get(ENV.Settings.BASE_URL) or '').strip().rstrip('/') or None

    rl_window_sec = max(Defaults.RL_WINDOW_SEC_FLOOR, _parse_int(env.get(ENV.Settings.RL_WINDOW_SEC), Defaults.RL_WINDOW_SEC))
    rl_max_req = max(Defaults.RL_MAX_REQ_FLOOR, _parse_int(env.get(ENV.Settings.RL_MAX_REQ), Defaults.RL_MAX_REQ))

    cors_mode = str(env.get(ENV.Settings.CORS_MODE) or Defaults.CORS_MODE).strip().lower()
    raw_origins = (env.get(ENV.Settings.CORS_ORIGINS) or '').strip()
    cors_origins = frozenset(origin.strip() for origin in raw_origins.split(',') if origin.strip())

    # Unlike the rate limiter settings, 0 is meaningful here (disabled)
    try:
        dedup_ttl_sec = int(str(env.get(ENV.Settings.DEDUP_TTL_SEC, Defaults.DEDUP_TTL_SEC)).strip())
    except ValueError:
        dedup_ttl_sec = Defaults.DEDUP_TTL_SEC

    settings = Settings(
        base_url=base_url,
        rl_window_sec=rl_window_sec,
        rl_max_req=rl_max_req,
        cors_mode=cors_mode,
        cors_origins=cors_origins,
        dedup_ttl_sec=dedup_ttl_sec,
    )
    logger.debug(
        'Loaded settings.',
        extra={
            'rlWindowSec': settings.rl_window_sec,
            'rlMaxReq': settings.rl_max_req,
            'corsMode': settings.cors_mode,
            'dedupTtlSec': settings.dedup_ttl_sec,
        },
    )
    return settings


def _parse_redis_db(raw: str | None) -> int:
    if raw in (None, ''):
        return 0
    try:
        return int(raw)
    except ValueError as e:
        raise BadConfigurationError(f'Invalid Redis DB index: {raw!r}') from e


def load_redis_config(environ: Mapping[str, str] | None = None) -> RedisConfiguration:
    """Return Key-Value store (Redis) connection parameters as DAO keyword arguments

    Example:
        >>> load_redis_config({'REDIS_HOST': 'redis.internal'})
        {'redis_host': 'redis.internal', 'redis_port': 6379, 'redis_db': 0, 'redis_username': None, 'redis_password': None}
    """
    env = os.environ if environ is None else environ
    return {
        'redis_host': env.get(ENV.Redis.HOST) or 'localhost',
        'redis_port': _parse_int(env.get(ENV.Redis.PORT), 6379),
        'redis_db': _parse_redis_db(env.get(ENV.Redis.DB)),
        'redis_username': env.get(ENV.Redis.USERNAME) or None,
        'redis_password': env.get(ENV.Redis.PASSWORD) or None,
    }

import functools
from collections.abc import Callable
from urllib.parse import quote


__all__ = ['CacheKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class CacheKeySchema:
    """Provide standardized Redis keys for the ephemeral ElastiCache cache.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "shortlink:prod" or "shortlink:dev".

    NOTE: Yes, this class mirrors RedisKeySchema, but we don't want to spaghettify
    the caching layer with our link store backend.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = f'cache:{prefix}' if prefix is not None else 'cache'

    @prefix_key
    def rate_limit_key(self, window: int, client: str) -> str:
        # Client addresses may contain ':' (IPv6), keep them a single key segment
        return f'ratelimit:short:{int(window)}:{quote(client, safe="")}'

import functools
from typing import TypeVar

import redis

from shortlink.dao.exceptions import DataStoreError


__all__ = ['describe_redis', 'handle_redis_errors']


F = TypeVar('F')


def describe_redis(client: redis.Redis) -> str:
    """Return 'host:port/db' of a client, for error messages"""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_errors(method: F) -> F:
    """Turn any redis-py failure inside a DAO method into DataStoreError

    Unreachable servers (ConnectionError, TimeoutError) and refused commands
    (ResponseError: OOM, READONLY replica, WRONGTYPE, ...) both mean the store
    can't serve the call, so callers only ever deal with DataStoreError.

    Example:
        >>> @handle_redis_errors
        ... def exists(self, shortcode):
        ...     return self.redis.exists(shortcode)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {describe_redis(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis at {describe_redis(self.redis)} rejected {method.__name__}: {e}') from e

    return wrapper

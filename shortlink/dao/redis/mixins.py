"""Shared Redis client wiring for the link store DAOs.

`ShortURLRedisDAO` and `DedupRedisDAO` both talk to the link store. The first
one builds the client from `load_redis_config()`; the second reuses it:

    >>> links = ShortURLRedisDAO(**load_redis_config(), prefix='shortlink:dev')
    >>> dedup = DedupRedisDAO(redis_client=links.redis, prefix='shortlink:dev')

Every DAO PINGs on construction, so an unreachable store fails fast with
DataStoreError before any request work is done.
"""

from typing import Optional

import redis

from shortlink.dao.redis.redis_key_schema import RedisKeySchema
from shortlink.dao.redis.helpers import handle_redis_errors


class RedisClientMixin:
    """Attach a Redis client (`self.redis`) and key schema (`self.keys`) to a DAO

    Args:
        redis_host, redis_port, redis_db, redis_username, redis_password:
            Connection parameters, used only when no client is injected.
        redis_decode_responses (bool):
            Return str instead of bytes. Defaults to True.
        redis_client (Optional[redis.Redis]):
            Client to share with another DAO.
        prefix (Optional[str]):
            Key namespace, e.g. 'shortlink:prod'.

    Raises:
        DataStoreError: if the PING fails.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_decode_responses: bool = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )
        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)
        self._healthcheck()

    @handle_redis_errors
    def _healthcheck(self) -> None:
        self.redis.ping()

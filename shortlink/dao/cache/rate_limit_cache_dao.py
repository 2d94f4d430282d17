"""DAO for fixed window rate limit counters in Redis (ElastiCache)

Counters are plain string integers under
'cache:<prefix>:ratelimit:short:<window index>:<client>' and always expire
at (or shortly after) the end of their window.

Classes:
    RateLimitCacheDAO:
        Concrete RateLimitBaseDAO backed by ElastiCache. Uses ElastiCacheClientMixin
        to initialize the Redis client (AWS/LocalStack aware).

Example:
    >>> dao = RateLimitCacheDAO(prefix='shortlink:dev')
    >>> dao.count('203.0.113.7', 29_000_000)
    0
    >>> dao.put('203.0.113.7', 29_000_000, count=1, ttl=42)
    <RateLimitCacheDAO>
"""

import logging

from beartype import beartype

from shortlink.dao.base import RateLimitBaseDAO
from shortlink.dao.cache.mixins import ElastiCacheClientMixin
from shortlink.dao.redis.helpers import handle_redis_errors


logger = logging.getLogger(__name__)


class RateLimitCacheDAO(ElastiCacheClientMixin, RateLimitBaseDAO):
    """Redis-backed rate limit counters

    Methods:
        count(client: str, window: int) -> int:
            GET the counter; absent or unparsable counters read as 0.
        put(client: str, window: int, count: int, ttl: int) -> RateLimitCacheDAO:
            SET the counter with EX <ttl>.
    """

    @handle_redis_errors
    @beartype
    def count(self, client: str, window: int, **kwargs) -> int:
        raw = self.redis.get(self.keys.rate_limit_key(window, client))
        if raw is None:
            return 0
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning('Ignoring corrupt rate limit counter %r.', raw, extra={'client': client, 'window': window})
            return 0

    @handle_redis_errors
    @beartype
    def put(self, client: str, window: int, count: int, ttl: int, **kwargs) -> 'RateLimitCacheDAO':
        self.redis.set(self.keys.rate_limit_key(window, client), count, ex=max(1, ttl))
        return self

"""Redis-backed store for dedup entries (content digest -> shortcode)

Dedup entries share the link store's Redis with the links themselves, under
'<prefix>:dedup:<digest>', and always expire (SET ... EX <ttl>).
"""

from beartype import beartype

from shortlink.dao.base import DedupBaseDAO
from shortlink.dao.redis.mixins import RedisClientMixin
from shortlink.dao.redis.helpers import handle_redis_errors


class DedupRedisDAO(RedisClientMixin, DedupBaseDAO):
    """Redis-based DAO for dedup entries

    Example:
        >>> links = ShortURLRedisDAO(prefix='shortlink:dev')
        >>> dedup = DedupRedisDAO(redis_client=links.redis, prefix='shortlink:dev')
        >>> dedup.put('2fd4e1c6...', 'kX7mQ2p', ttl=3600)
        <DedupRedisDAO>
        >>> dedup.get('2fd4e1c6...')
        'kX7mQ2p'
    """

    @handle_redis_errors
    @beartype
    def get(self, digest: str, **kwargs) -> str | None:
        return self.redis.get(self.keys.dedup_key(digest)) or None

    @handle_redis_errors
    @beartype
    def put(self, digest: str, shortcode: str, ttl: int, **kwargs) -> 'DedupRedisDAO':
        if ttl <= 0:
            raise ValueError(f'Dedup entries must expire (given ttl: {ttl}).')
        self.redis.set(self.keys.dedup_key(digest), shortcode, ex=ttl)
        return self

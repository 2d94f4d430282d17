from shortlink.dao.redis.redis_key_schema import RedisKeySchema
from shortlink.dao.redis.mixins import RedisClientMixin
from shortlink.dao.redis.short_url_redis_dao import ShortURLRedisDAO
from shortlink.dao.redis.dedup_redis_dao import DedupRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortURLRedisDAO',
    'DedupRedisDAO',
]

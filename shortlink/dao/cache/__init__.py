from shortlink.dao.cache.cache_key_schema import CacheKeySchema
from shortlink.dao.cache.mixins import ElastiCacheClientMixin
from shortlink.dao.cache.rate_limit_cache_dao import RateLimitCacheDAO

__all__ = [
    'CacheKeySchema',
    'ElastiCacheClientMixin',
    'RateLimitCacheDAO',
]

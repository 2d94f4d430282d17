from shortlink.dao.base.short_url_base_dao import ShortURLBaseDAO
from shortlink.dao.base.dedup_base_dao import DedupBaseDAO
from shortlink.dao.base.rate_limit_base_dao import RateLimitBaseDAO


__all__ = [
    'ShortURLBaseDAO',
    'DedupBaseDAO',
    'RateLimitBaseDAO',
]

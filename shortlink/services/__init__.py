from shortlink.services.dedup import DeduplicationIndex
from shortlink.services.allocator import LinkAllocator
from shortlink.services.resolver import Resolver
from shortlink.services.rate_limiter import RateLimiter


__all__ = [
    'DeduplicationIndex',
    'LinkAllocator',
    'Resolver',
    'RateLimiter',
]

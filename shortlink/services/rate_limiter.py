"""Fixed window rate limiter for link creation

Each client gets `RL_MAX_REQ` requests per window of `RL_WINDOW_SEC`
seconds. Windows are aligned to the unix epoch:

    window   = now // W
    reset_in = (window + 1) * W - now

Counters live in the ephemeral cache and expire when their window closes.
Windows are fixed, not sliding, so a client can get up to 2 * M requests
through around a window boundary.

The read and the write are separate cache calls; concurrent requests from
one client may undercount.
"""

import time
import logging

from shortlink.dao.base import RateLimitBaseDAO
from shortlink.exceptions import RateLimitedError
from shortlink.models import RateLimitDecision
from shortlink.utils.config import Settings


logger = logging.getLogger(__name__)


class RateLimiter:
    """Admit or reject requests per client address

    Args:
        dao (RateLimitBaseDAO): counter store.
        settings (Settings): provides `rl_window_sec` and `rl_max_req`.

    Example:
        >>> limiter = RateLimiter(RateLimitCacheDAO(prefix=app_prefix()), load_settings())
        >>> limiter.admit('203.0.113.7')
        RateLimitDecision(allowed=True, remaining=9, reset_in=42)
    """

    def __init__(self, dao: RateLimitBaseDAO, settings: Settings):
        self.dao = dao
        self.window_sec = settings.rl_window_sec
        self.max_requests = settings.rl_max_req

    def admit(self, client: str) -> RateLimitDecision:
        """Count one request from `client` in the current window

        Raises:
            DataStoreError: if the cache is unavailable.
        """
        now = int(time.time())
        window = now // self.window_sec
        reset_in = (window + 1) * self.window_sec - now

        count = self.dao.count(client, window)
        if count >= self.max_requests:
            logger.debug('Client over rate limit.', extra={'client': client, 'window': window, 'count': count})
            return RateLimitDecision(allowed=False, remaining=0, reset_in=reset_in)

        count += 1
        self.dao.put(client, window, count, ttl=max(1, reset_in))
        return RateLimitDecision(allowed=True, remaining=self.max_requests - count, reset_in=reset_in)

    def enforce(self, client: str) -> RateLimitDecision:
        """Like `admit`, but raise when the request is rejected

        Raises:
            RateLimitedError: carrying the rejecting decision.
            DataStoreError: if the cache is unavailable.
        """
        decision = self.admit(client)
        if not decision.allowed:
            raise RateLimitedError(decision)
        return decision

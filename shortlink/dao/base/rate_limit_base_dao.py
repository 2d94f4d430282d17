"""Abstract base class for rate limit counter DAOs.

Counters live in an ephemeral cache that is independent of the link store.
A counter is addressed by (client address, window index); a missing counter
means zero requests so far in that window.
"""

from abc import ABC, abstractmethod


class RateLimitBaseDAO(ABC):
    """Interface for fixed window rate limit counters.

    Methods:
        count(client: str, window: int, **kwargs) -> int:
            Return the request count for the client in the given window (0 if absent).
            Raises DataStoreError on connection or read failure.

        put(client: str, window: int, count: int, ttl: int, **kwargs) -> RateLimitBaseDAO:
            Overwrite the request count, expiring after `ttl` seconds.
            Raises DataStoreError on connection or write failure.
    """

    @abstractmethod
    def count(self, client: str, window: int, **kwargs) -> int:
        pass

    @abstractmethod
    def put(self, client: str, window: int, count: int, ttl: int, **kwargs) -> 'RateLimitBaseDAO':
        pass

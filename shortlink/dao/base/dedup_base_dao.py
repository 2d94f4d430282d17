"""Abstract base class for deduplication entry DAOs.

A dedup entry maps a content digest of a long URL to the shortcode that was
allocated for it. Entries always carry a TTL and are never deleted
explicitly; the store's native expiry cleans them up.
"""

from abc import ABC, abstractmethod


class DedupBaseDAO(ABC):
    """Interface for dedup entry data access objects (DAOs).

    Methods:
        get(digest: str, **kwargs) -> str | None:
            Return the shortcode recorded for a digest, None if absent/expired.
            Raises DataStoreError on connection or read failure.

        put(digest: str, shortcode: str, ttl: int, **kwargs) -> DedupBaseDAO:
            Record a digest -> shortcode entry expiring after `ttl` seconds.
            Raises DataStoreError on connection or write failure.
    """

    @abstractmethod
    def get(self, digest: str, **kwargs) -> str | None:
        pass

    @abstractmethod
    def put(self, digest: str, shortcode: str, ttl: int, **kwargs) -> 'DedupBaseDAO':
        pass

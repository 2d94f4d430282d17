"""Abstract base class for short link data access objects (DAOs).

This class establishes a consistent contract for all short link DAO
implementations, regardless of the underlying key-value store.

The store is assumed to offer plain get/put only: no compare-and-swap, no
transactions and only eventual read-after-write consistency. Callers that
need "insert if absent" semantics must do a read followed by a write and
live with the race between the two (see LinkAllocator).

Example:
    >>> from shortlink.models import ShortURLModel
    >>> from shortlink.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(...)
    >>> dao.insert(ShortURLModel(target='https://example.com/blog/article-123', shortcode='kX7mQ2p'))
    >>> dao.get('kX7mQ2p').target
    'https://example.com/blog/article-123'
"""

from abc import ABC, abstractmethod

from shortlink.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for short link data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Write the shortcode -> target mapping (overwrites, no TTL).
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a short link by shortcode.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether a shortcode is taken.
            Raises DataStoreError on connection or read failure.

    NOTE:
        - The DAO never deletes links.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Write a short link into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be written.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a short link from the data store by its shortcode.

        Raises:
            ShortURLNotFoundError:
                If no short link with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def exists(self, shortcode: str, **kwargs) -> bool:
        """Return True if a short link with the given shortcode exists.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

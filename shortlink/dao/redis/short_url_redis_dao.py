"""Data Access Object (DAO) implementation for managing short links in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO.

Responsibilities:
    - Write and read shortcode -> long URL mappings;
    - Check whether a shortcode is already taken;
    - Raise appropriate DAO exceptions.

Links are written with a plain SET (no NX, no TTL). The DAO deliberately
doesn't hide the check-then-write race behind a transaction: the link store
contract only offers get/put, and callers are written against that contract.

Example:
    >>> from shortlink.models import ShortURLModel
    >>> from shortlink.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="shortlink:dev")
    >>> dao.exists("kX7mQ2p")
    False
    >>> dao.insert(ShortURLModel(target="https://example.com/page", shortcode="kX7mQ2p"))
    <ShortURLRedisDAO>
    >>> dao.get("kX7mQ2p").target
    'https://example.com/page'
"""

from beartype import beartype

from shortlink.models import ShortURLModel
from shortlink.dao.base import ShortURLBaseDAO
from shortlink.dao.redis.mixins import RedisClientMixin
from shortlink.dao.redis.helpers import handle_redis_errors
from shortlink.dao.exceptions import ShortURLNotFoundError


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short link mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLRedisDAO:
            SET <prefix>:links:<shortcode>:url <target>
        get(shortcode: str, **kwargs) -> ShortURLModel:
            GET <prefix>:links:<shortcode>:url
        exists(shortcode: str, **kwargs) -> bool:
            EXISTS <prefix>:links:<shortcode>:url
    """

    @handle_redis_errors
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLRedisDAO':
        """Write a short link mapping into Redis

        Overwrites any existing value under the same shortcode. Links have
        no TTL and live until purged externally.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If Redis is unreachable or refuses the command.
        """
        self.redis.set(self.keys.link_url_key(short_url.shortcode), short_url.target)
        return self

    @handle_redis_errors
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short link by shortcode

        Raises:
            ShortURLNotFoundError:
                If the short link does not exist in Redis.
            DataStoreError:
                If Redis is unreachable or refuses the command.

        Example:
            >>> dao.get('kX7mQ2p')
            ShortURLModel(target='https://example.com', shortcode='kX7mQ2p')
        """
        target = self.redis.get(self.keys.link_url_key(shortcode))
        if not target:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return ShortURLModel(target=target, shortcode=shortcode)

    @handle_redis_errors
    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.link_url_key(shortcode)))

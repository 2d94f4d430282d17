"""Resolve shortcodes back to their long URLs"""

from shortlink.dao.base import ShortURLBaseDAO
from shortlink.dao.exceptions import ShortURLNotFoundError
from shortlink.utils.shortener import is_valid_shortcode


class Resolver:
    def __init__(self, links: ShortURLBaseDAO):
        self.links = links

    def resolve(self, shortcode: str) -> str:
        """Return the long URL stored for `shortcode`

        Malformed shortcodes are rejected without a store round-trip. The
        stored URL is returned as is (it was validated when written).

        Raises:
            ShortURLNotFoundError: if the shortcode is malformed or unknown.
            DataStoreError: if the link store is unavailable.
        """
        if not is_valid_shortcode(shortcode):
            raise ShortURLNotFoundError(f'Malformed shortcode {shortcode!r}.')
        return self.links.get(shortcode).target

"""Optional deduplication of identical long URLs

Maps the SHA-1 digest of the exact long URL string to the shortcode that
was allocated for it. Entries expire after DEDUP_TTL_SEC seconds; with the
default TTL of 0 the index is disabled and never touches the store.

An entry is a hint, not a canonical index: LinkAllocator must check that
the link it points to still exists before reusing it.
"""

import hashlib
import logging

from shortlink.dao.base import DedupBaseDAO
from shortlink.dao.exceptions import DataStoreError
from shortlink.utils.config import Settings


logger = logging.getLogger(__name__)


def url_digest(long_url: str) -> str:
    """Return the hex SHA-1 digest of a long URL

    Example:
        >>> len(url_digest('https://example.com'))
        40
    """
    return hashlib.sha1(long_url.encode('utf-8')).hexdigest()  # noqa: S324


class DeduplicationIndex:
    """Best-effort (long URL -> shortcode) index

    Args:
        dao (DedupBaseDAO): dedup entry store.
        settings (Settings): provides `dedup_ttl_sec`.
    """

    def __init__(self, dao: DedupBaseDAO, settings: Settings):
        self.dao = dao
        self.settings = settings

    @property
    def enabled(self) -> bool:
        return self.settings.dedup_enabled

    def lookup(self, long_url: str) -> str | None:
        """Return the shortcode recorded for `long_url`, None if absent or disabled

        Raises:
            DataStoreError: if the store can't be read.
        """
        if not self.enabled:
            return None
        return self.dao.get(url_digest(long_url))

    def record(self, long_url: str, shortcode: str) -> None:
        """Record `long_url` -> `shortcode`; write failures are logged and ignored"""
        if not self.enabled:
            return

        try:
            self.dao.put(url_digest(long_url), shortcode, ttl=self.settings.dedup_ttl_sec)
        except DataStoreError:
            logger.warning(
                'Failed to record dedup entry. Continuing without it.',
                exc_info=True,
                extra={'shortcode': shortcode},
            )

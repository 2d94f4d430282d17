"""Link allocation: turn a validated long URL into a stored shortcode

Procedure:
    1. Reuse a live dedup hit, if any (no write).
    2. Draw up to 6 random candidates, taking the first one not in the store.
    3. Write the link, then record the dedup entry (best-effort).

The availability check and the write in step 2-3 are two separate store
calls. Two concurrent requests may both see the same candidate as free and
the later write wins. With a 58^7 keyspace this is rare enough to accept,
and the link store has no primitive that would prevent it.
"""

import logging
from collections.abc import Callable

from shortlink.constants import Shortcode
from shortlink.dao.base import ShortURLBaseDAO
from shortlink.exceptions import AllocationExhaustedError
from shortlink.models import ShortURLModel
from shortlink.services.dedup import DeduplicationIndex
from shortlink.utils.config import Settings
from shortlink.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class LinkAllocator:
    """Allocate shortcodes for long URLs against the link store

    Args:
        links (ShortURLBaseDAO):
            Link store.
        dedup (DeduplicationIndex):
            Deduplication index (may be disabled).
        settings (Settings):
            Application settings.
        generator (Callable[[], str]):
            Candidate shortcode source. Defaults to `generate_shortcode`.
        max_attempts (int):
            Candidates to try before giving up. Defaults to 6.

    Example:
        >>> allocator = LinkAllocator(links_dao, DeduplicationIndex(dedup_dao, settings), settings)
        >>> allocator.allocate('https://example.com')
        'kX7mQ2p'
    """

    def __init__(
        self,
        links: ShortURLBaseDAO,
        dedup: DeduplicationIndex,
        settings: Settings,
        generator: Callable[[], str] = generate_shortcode,
        max_attempts: int = Shortcode.MAX_ALLOCATION_ATTEMPTS,
    ):
        self.links = links
        self.dedup = dedup
        self.settings = settings
        self.generator = generator
        self.max_attempts = max_attempts

    def allocate(self, long_url: str) -> str:
        """Return a shortcode resolving to `long_url`

        Raises:
            AllocationExhaustedError: if every candidate was taken.
            DataStoreError: if the link store is unavailable.
        """
        shortcode = self._reuse(long_url)
        if shortcode is not None:
            return shortcode

        shortcode = self._pick_free_shortcode()
        self.links.insert(ShortURLModel(target=long_url, shortcode=shortcode))
        logger.debug('Stored short link.', extra={'shortcode': shortcode})

        self.dedup.record(long_url, shortcode)
        return shortcode

    def _reuse(self, long_url: str) -> str | None:
        shortcode = self.dedup.lookup(long_url)
        if shortcode is None:
            return None

        # Dangling entries (link gone) are ignored and left to expire
        if not self.links.exists(shortcode):
            logger.debug('Ignoring dangling dedup entry.', extra={'shortcode': shortcode})
            return None

        logger.debug('Reusing deduplicated short link.', extra={'shortcode': shortcode})
        return shortcode

    def _pick_free_shortcode(self) -> str:
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generator()
            if not self.links.exists(candidate):
                return candidate
            logger.info('Shortcode collision.', extra={'shortcode': candidate, 'attempt': attempt})

        raise AllocationExhaustedError(f'No free shortcode after {self.max_attempts} attempts.')

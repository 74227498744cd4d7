"""Title to page ID cache backed by Confluence lookups.

The cache only saves round trips. Any entry can be re-derived from
Confluence, and the leaf document of every publish is always looked up
fresh so that its ID and version are current before an update.
"""

import logging
from typing import Callable, Dict, Optional

from src.confluence_client.api_wrapper import APIWrapper
from src.models.page_lookup import PageFound, PageLookup

from .cache_store import CacheMapping

logger = logging.getLogger(__name__)


class IdentityCache:
    """Resolves page titles to Confluence page IDs, remembering the answers.

    Entries are keyed by space key and title, so the same title in two
    spaces never shares an ID. Persistence is injected: ``load`` is called
    once when the cache is created and ``save`` after every new entry.

    Example:
        >>> cache = IdentityCache(
        ...     api,
        ...     load=lambda: CacheStore.load(path),
        ...     save=lambda mapping: CacheStore.save(path, mapping),
        ... )
        >>> cache.resolve("DOCS", "Knowledge Base")
        109283151
    """

    def __init__(
        self,
        api: APIWrapper,
        load: Optional[Callable[[], CacheMapping]] = None,
        save: Optional[Callable[[CacheMapping], None]] = None,
    ):
        """Initialize the cache and load persisted entries.

        Args:
            api: APIWrapper used for lookups on a cache miss
            load: Returns the persisted mapping (defaults to empty)
            save: Persists the full mapping after each change (defaults to no-op)
        """
        self.api = api
        self._save = save
        self._entries: Dict[str, Dict[str, int]] = {
            space: dict(titles) for space, titles in (load() if load else {}).items()
        }
        logger.debug(f"Loaded {len(self)} cached page ID(s)")

    def __len__(self) -> int:
        return sum(len(titles) for titles in self._entries.values())

    def get(self, space: str, title: str) -> Optional[int]:
        """Cached page ID, without any remote call."""
        return self._entries.get(space, {}).get(title)

    def set(self, space: str, title: str, page_id: int) -> None:
        """Record a mapping and persist it."""
        if self.get(space, title) == page_id:
            return
        self._entries.setdefault(space, {})[title] = page_id
        self._persist()

    def forget(self, space: str, title: str) -> bool:
        """Drop one entry, e.g. after the page was deleted in Confluence.

        Returns:
            True if an entry was removed
        """
        titles = self._entries.get(space)
        if not titles or title not in titles:
            return False
        del titles[title]
        if not titles:
            del self._entries[space]
        self._persist()
        return True

    def clear(self) -> None:
        self._entries = {}
        self._persist()

    def snapshot(self) -> CacheMapping:
        return {space: dict(titles) for space, titles in self._entries.items()}

    def _persist(self) -> None:
        if self._save is not None:
            self._save(self.snapshot())

    def lookup(self, space: str, title: str) -> PageLookup:
        """Fresh lookup in Confluence, bypassing and not updating the cache."""
        return self.api.find_page(space, title)

    def resolve(self, space: str, title: str, use_cache: bool = True) -> Optional[int]:
        """Resolve a page title to its page ID.

        Args:
            space: The space key
            title: The page title
            use_cache: Answer from the cache when possible and remember
                       the result of a remote lookup

        Returns:
            The page ID, or None if no such page exists in the space

        Raises:
            ConfluenceError: If the remote lookup fails
        """
        if use_cache:
            cached = self.get(space, title)
            if cached is not None:
                logger.debug(f"Cache hit: '{title}' in {space} -> {cached}")
                return cached

        result = self.lookup(space, title)
        if not isinstance(result, PageFound):
            logger.warning(f"Failed to get page id for '{title}' in space {space}")
            return None

        logger.debug(f"Resolved '{title}' in {space} -> {result.page_id}")
        if use_cache:
            self.set(space, title, result.page_id)
        return result.page_id

"""
Transient cache for fetched catalog lists.

Owned by one service instance (one session or request context) and passed
by reference, never shared process-wide. Keys are `(source,)` for species
lists, `(source, species_id)` for pathway lists and `(source, GLOBAL_KEY)`
for payloads a source only serves as a whole.
"""

import logging
import threading
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

logger = logging.getLogger("PathwayCatalog.Cache")

GLOBAL_KEY = "__catalog__"

CacheKey = Tuple[Hashable, ...]


class TransientCache:
    """
    In-memory memo of catalog fetches.

    Writes overwrite unconditionally; there is no merging of partial
    results. Invalidation is wholesale per source or for everything.
    """

    def __init__(self):
        self._entries: Dict[CacheKey, Any] = {}
        self._lock = threading.RLock()
        self.hits = 0
        self.misses = 0

    def get(self, key: CacheKey) -> Optional[Any]:
        """
        Get cached item.

        Args:
            key: Cache key tuple

        Returns:
            Cached value or None
        """
        with self._lock:
            if key in self._entries:
                self.hits += 1
                return self._entries[key]
            self.misses += 1
            return None

    def set(self, key: CacheKey, value: Any) -> None:
        """Store a value, replacing whatever was cached under the key."""
        with self._lock:
            self._entries[key] = value

    def get_or_fetch(self, key: CacheKey, fetch: Callable[[], Any]) -> Any:
        """Return the cached value, or call `fetch` and cache its result."""
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached
        value = fetch()
        self.set(key, value)
        return value

    def invalidate(self, source: Hashable) -> int:
        """Drop every entry of one source. Returns the number removed."""
        with self._lock:
            stale = [k for k in self._entries if k and k[0] == source]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cache entries for {source}")
        return len(stale)

    def clear(self) -> None:
        """Clear all cache"""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

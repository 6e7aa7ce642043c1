"""
Result Cache - In-memory search result memo with TTL.

Purely a cost/latency optimization: removing it never changes what a
query returns, only how often providers are called.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from .models import CacheEntry, CacheStats, SearchResult, utc_now

logger = logging.getLogger(__name__)

__all__ = ["ResultCache", "CACHE_TTL", "make_cache_key"]

CACHE_TTL = timedelta(minutes=30)
DEFAULT_TIMEZONE = "UTC"


def make_cache_key(query: str, timezone_hint: str | None = None) -> str:
    """Normalized query plus timezone; "today" differs across timezones."""
    return f"{query.lower().strip()}_{timezone_hint or DEFAULT_TIMEZONE}"


class ResultCache:
    """
    TTL cache for search results.

    All map access goes through one asyncio lock. When two writers race on
    the same key the last put wins; readers never observe a partial entry
    because entries are immutable and swapped in whole.
    """

    def __init__(
        self,
        default_ttl: timedelta = CACHE_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize cache.

        Args:
            default_ttl: Validity window for put() without explicit ttl
            clock: Source of aware "now" timestamps
        """
        self._entries: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()
        self._default_ttl = default_ttl
        self._clock = clock

    async def get(self, key: str) -> SearchResult | None:
        """Get cached result if not expired; expired entries are evicted."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if not entry.is_valid(self._clock()):
                del self._entries[key]
                logger.debug("Cache entry expired: %s", key[:32])
                return None

        logger.debug("Cache hit: %s", key[:32])
        return entry.result

    async def put(
        self,
        key: str,
        result: SearchResult,
        ttl: timedelta | None = None,
    ) -> None:
        """Insert or overwrite an entry expiring ttl from now."""
        if ttl is None:
            ttl = self._default_ttl
        entry = CacheEntry(result=result, expires_at=self._clock() + ttl)

        async with self._lock:
            self._entries[key] = entry

        logger.debug("Cached result: %s (TTL: %ds)", key[:32], ttl.total_seconds())

    async def sweep(self) -> int:
        """Remove every expired entry."""
        async with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if not e.is_valid(now)]
            for key in expired:
                del self._entries[key]

        logger.info("Swept %d expired cache entries", len(expired))
        return len(expired)

    async def clear(self) -> None:
        """Clear all cache entries."""
        async with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Cleared %d cache entries", count)

    def stats(self) -> CacheStats:
        """Total map size vs. entries still valid right now."""
        now = self._clock()
        entries = list(self._entries.values())
        return CacheStats(
            total_entries=len(entries),
            valid_entries=sum(1 for e in entries if e.is_valid(now)),
        )

    def __len__(self) -> int:
        return len(self._entries)

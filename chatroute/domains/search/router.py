"""
Search Router - Tiered web search with caching and graceful degradation.

Flow for one query:
    cache lookup -> classify -> tier provider -> wrap -> cache -> return

Provider failures never reach the caller: they degrade into an apology
result that is returned but not cached, so the next call retries.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import datetime, timedelta

from .cache import CACHE_TTL, ResultCache, make_cache_key
from .classifier import SearchClassifier
from .contracts import SearchProvider
from .models import CacheStats, SearchResult, SearchTier, utc_now
from .timecontext import format_datetime_context

logger = logging.getLogger(__name__)

__all__ = ["SearchRouter", "TIER_PARAMS", "fallback_message"]

# Output budget and temperature per tier
TIER_PARAMS: dict[SearchTier, dict[str, float]] = {
    SearchTier.BASIC: {"token_budget": 6000, "temperature": 0.3},
    SearchTier.ADVANCED: {"token_budget": 10000, "temperature": 0.1},
}

BASIC_TIER_NOTE = (
    "\n\n💡 *Note: This is a basic search. For real-time information, "
    "try asking again with more specific current context.*"
)

CYRILLIC = re.compile(r"[а-яё]", re.IGNORECASE)


def fallback_message(query: str) -> str:
    """Apology text; Cyrillic in the query selects Russian."""
    if "русск" in query.lower() or CYRILLIC.search(query):
        return (
            f'Извините, не удалось выполнить поиск по запросу "{query}". '
            "Рекомендую проверить актуальную информацию из специализированных источников."
        )
    return (
        f'Sorry, I couldn\'t perform a search for "{query}". '
        "I recommend checking current information from specialized sources."
    )


def _basic_prompt(query: str, datetime_context: str) -> str:
    return f"""You are a helpful search assistant. The user is asking: "{query}"

Current context: {datetime_context}

Based on your knowledge (up to your training cutoff), provide a helpful answer. If this requires very recent/real-time information that you might not have, clearly indicate that and suggest checking current sources.

Respond in the same language as the query. Be concise but informative.

Query: {query}"""


def _advanced_system(datetime_context: str) -> str:
    return f"""You are a helpful search assistant with real-time web search capabilities. Always respond in the same language as the user's query.

Current context: {datetime_context}

Provide accurate, up-to-date information based on current web search results. Be specific with facts, dates, and sources when available."""


def _advanced_prompt(query: str) -> str:
    return f"""Search for current information about: "{query}"

Please provide:
1. Current, factual information from reliable sources
2. Recent updates if this is a time-sensitive topic
3. Specific details like dates, numbers, locations when relevant
4. Brief context to help understand the information

Search query: {query}"""


class SearchRouter:
    """
    Web search service shared by all agents.

    Example:
        >>> router = SearchRouter(basic_provider, advanced_provider)
        >>> result = await router.search("breaking news: market crash")
        >>> print(result.result_text)
    """

    def __init__(
        self,
        basic_provider: SearchProvider,
        advanced_provider: SearchProvider,
        cache: ResultCache | None = None,
        classifier: SearchClassifier | None = None,
        ttl: timedelta = CACHE_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize router.

        Args:
            basic_provider: Backend for the cost-optimized tier
            advanced_provider: Backend for the real-time tier
            cache: Shared result cache (one is created if omitted)
            classifier: Tier classifier
            ttl: Cache validity window
            clock: Source of aware "now" timestamps
        """
        self._providers = {
            SearchTier.BASIC: basic_provider,
            SearchTier.ADVANCED: advanced_provider,
        }
        self._clock = clock
        self._cache = cache or ResultCache(default_ttl=ttl, clock=clock)
        self._classifier = classifier or SearchClassifier()
        self._ttl = ttl

    @property
    def classifier(self) -> SearchClassifier:
        return self._classifier

    async def search(self, query: str, timezone_hint: str | None = None) -> SearchResult:
        """Search with tier chosen by the classifier."""
        return await self._search(query, timezone_hint, tier=None)

    async def basic_search(
        self, query: str, timezone_hint: str | None = None
    ) -> SearchResult:
        """Force the basic tier (explicit user command)."""
        logger.info("Forcing BASIC search for: %s", query)
        return await self._search(query, timezone_hint, tier=SearchTier.BASIC)

    async def advanced_search(
        self, query: str, timezone_hint: str | None = None
    ) -> SearchResult:
        """Force the advanced tier (explicit user command)."""
        logger.info("Forcing ADVANCED search for: %s", query)
        return await self._search(query, timezone_hint, tier=SearchTier.ADVANCED)

    def is_search_needed(self, text: str) -> bool:
        """Advisory keyword check; does not gate search()."""
        return self._classifier.is_search_needed(text)

    async def clean_cache(self) -> int:
        """Drop expired cache entries."""
        return await self._cache.sweep()

    def cache_stats(self) -> CacheStats:
        """Cache occupancy for diagnostics."""
        return self._cache.stats()

    async def _search(
        self,
        query: str,
        timezone_hint: str | None,
        tier: SearchTier | None,
    ) -> SearchResult:
        cache_key = make_cache_key(query, timezone_hint)

        cached = await self._cache.get(cache_key)
        if cached is not None:
            logger.info("Using cached search result for: %s", query)
            return cached

        if tier is None:
            classification = self._classifier.classify(query)
            tier = classification.tier
            logger.info(
                "Query classification: %s (confidence: %.1f, %s)",
                tier.value,
                classification.confidence,
                classification.reasoning,
            )

        try:
            text = await self._call_provider(tier, query, timezone_hint)
        except Exception as e:
            logger.error("Error in %s web search for %r: %s", tier.value, query, e)
            return SearchResult(
                query=query,
                result_text=fallback_message(query),
                produced_at=self._clock(),
            )

        result = SearchResult(query=query, result_text=text, produced_at=self._clock())
        await self._cache.put(cache_key, result, self._ttl)
        return result

    async def _call_provider(
        self,
        tier: SearchTier,
        query: str,
        timezone_hint: str | None,
    ) -> str:
        """Run the tier's provider and return its text."""
        logger.info("Performing %s search for: %s", tier.value.upper(), query)
        datetime_context = format_datetime_context(timezone_hint, now=self._clock())
        params = TIER_PARAMS[tier]
        provider = self._providers[tier]

        if tier == SearchTier.ADVANCED:
            prompt = _advanced_prompt(query)
            system_context: str | None = _advanced_system(datetime_context)
        else:
            prompt = _basic_prompt(query, datetime_context)
            system_context = None

        text = await provider.generate(
            prompt,
            system_context=system_context,
            token_budget=int(params["token_budget"]),
            temperature=params["temperature"],
        )

        if not text or not text.strip():
            raise ValueError("Provider returned empty text")

        if tier == SearchTier.BASIC:
            text += BASIC_TIER_NOTE
        return text

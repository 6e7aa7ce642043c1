"""
Search Classifier - Pattern-based tier selection for web search.

Advanced searches are materially more expensive per call, so only queries
matching a time-critical pattern are promoted; everything else stays basic.
"""

from __future__ import annotations

import logging
import re

from .models import SearchClassification, SearchTier

logger = logging.getLogger(__name__)

__all__ = [
    "SearchClassifier",
    "CRITICAL_PATTERNS",
    "SEARCH_KEYWORDS",
]

# Time-critical markers per locale
CRITICAL_PATTERNS: dict[str, list[str]] = {
    "en": [
        r"breaking news|breaking|urgent",
        r"live|real.?time",
        r"emergency|disaster",
    ],
    "ru": [
        r"срочные новости|срочно",
        r"прямой эфир|онлайн|в реальном времени",
        r"чрезвычайная ситуация|авария|катастроф",
    ],
}

# Topical triggers that suggest live data is wanted
SEARCH_KEYWORDS: tuple[str, ...] = (
    # English
    "news", "today", "current", "latest", "recent", "weather",
    "price", "stock", "happening", "now", "when", "where", "who",
    "this week", "this month", "this year", "trending", "update",
    "search", "find", "what is", "how much", "status", "results",
    # Russian
    "новости", "сегодня", "сейчас", "последние", "свежие", "актуальные",
    "погода", "курс", "цена", "биржа", "котировки", "события",
    "что происходит", "что случилось", "текущий", "недавно",
    "когда", "где", "кто", "статистика", "данные", "найди", "поищи",
)


class SearchClassifier:
    """
    Deterministic query classifier.

    Total over all strings: no I/O, no state, empty input is basic.
    """

    ADVANCED_CONFIDENCE = 0.9
    BASIC_CONFIDENCE = 0.8

    def __init__(
        self,
        patterns: dict[str, list[str]] | None = None,
        keywords: tuple[str, ...] = SEARCH_KEYWORDS,
    ) -> None:
        """
        Initialize classifier.

        Args:
            patterns: Critical regex patterns keyed by locale
            keywords: Trigger keywords for is_search_needed
        """
        source = patterns if patterns is not None else CRITICAL_PATTERNS
        self._compiled = [
            (locale, re.compile(pattern, re.IGNORECASE))
            for locale, locale_patterns in source.items()
            for pattern in locale_patterns
        ]
        self._keywords = tuple(k.lower() for k in keywords)

    def classify(self, query: str) -> SearchClassification:
        """Map a query to a search tier."""
        text = query.lower()

        for locale, regex in self._compiled:
            if regex.search(text):
                logger.debug("Critical pattern (%s) matched: %s", locale, regex.pattern)
                return SearchClassification(
                    tier=SearchTier.ADVANCED,
                    confidence=self.ADVANCED_CONFIDENCE,
                    reasoning="critical pattern match",
                )

        return SearchClassification(
            tier=SearchTier.BASIC,
            confidence=self.BASIC_CONFIDENCE,
            reasoning="default cost-optimized tier",
        )

    def is_search_needed(self, text: str) -> bool:
        """Advisory: does free text mention a topic that needs live data."""
        lowered = text.lower()
        return any(keyword in lowered for keyword in self._keywords)

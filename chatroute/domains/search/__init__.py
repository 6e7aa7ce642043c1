"""
Search Domain - Tiered web search with result caching.

This domain handles:
- Query tier classification (basic vs. advanced)
- Time-bounded result caching
- Provider dispatch with date/time context
- Graceful degradation on provider failure
"""

from .cache import CACHE_TTL, ResultCache, make_cache_key
from .classifier import SearchClassifier
from .contracts import SearchDiagnostics, SearchProvider, WebSearch
from .models import (
    CacheEntry,
    CacheStats,
    SearchClassification,
    SearchResult,
    SearchTier,
)
from .providers import (
    GeminiGroundedSearchProvider,
    OpenRouterSearchProvider,
    build_search_router,
)
from .router import SearchRouter
from .timecontext import format_datetime_context

__all__ = [
    # Contracts
    "SearchProvider",
    "WebSearch",
    "SearchDiagnostics",
    # Models
    "SearchTier",
    "SearchClassification",
    "SearchResult",
    "CacheEntry",
    "CacheStats",
    # Implementations
    "SearchClassifier",
    "ResultCache",
    "SearchRouter",
    "OpenRouterSearchProvider",
    "GeminiGroundedSearchProvider",
    "build_search_router",
    "make_cache_key",
    "format_datetime_context",
    "CACHE_TTL",
]

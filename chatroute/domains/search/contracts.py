"""
Search Contracts - Interfaces for search domain.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import CacheStats, SearchResult


@runtime_checkable
class SearchProvider(Protocol):
    """Contract for a tier backend (Perplexity via OpenRouter, Gemini grounding, ...)."""

    async def generate(
        self,
        prompt: str,
        system_context: str | None = None,
        token_budget: int = 6000,
        temperature: float = 0.3,
    ) -> str:
        """
        Produce search-augmented text for a prompt.

        Args:
            prompt: User-facing search prompt
            system_context: Optional system instruction
            token_budget: Maximum output tokens
            temperature: Sampling temperature

        Returns:
            Raw provider text

        Raises:
            Any transport, quota, or payload error.
        """
        ...


@runtime_checkable
class WebSearch(Protocol):
    """Search capability handed to model agents as a tool."""

    async def search(self, query: str, timezone_hint: str | None = None) -> SearchResult:
        """Search with automatic tier selection."""
        ...

    def is_search_needed(self, text: str) -> bool:
        """Advisory check whether free text asks for live data."""
        ...


@runtime_checkable
class SearchDiagnostics(Protocol):
    """Operator-visible cache diagnostics."""

    async def clean_cache(self) -> int:
        """Drop expired entries, returning how many were removed."""
        ...

    def cache_stats(self) -> CacheStats:
        """Current cache occupancy."""
        ...

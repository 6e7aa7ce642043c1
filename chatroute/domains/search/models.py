"""
Search Models - Data types for search domain.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class SearchTier(str, Enum):
    """Cost/quality class of a web search."""

    BASIC = "basic"  # Cost-optimized default
    ADVANCED = "advanced"  # Real-time, materially more expensive


class SearchClassification(BaseModel):
    """Tier decision for a query."""

    tier: SearchTier
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str

    model_config = {"frozen": True}


class SearchResult(BaseModel):
    """Text produced by a search provider for one query."""

    query: str
    result_text: str
    produced_at: datetime = Field(default_factory=utc_now)

    model_config = {"frozen": True}


class CacheEntry(BaseModel):
    """Cached search result with absolute expiry."""

    result: SearchResult
    expires_at: datetime

    model_config = {"frozen": True}

    def is_valid(self, now: datetime) -> bool:
        """Entry is valid strictly before its expiry instant."""
        return now < self.expires_at


class CacheStats(BaseModel):
    """Snapshot of cache occupancy."""

    total_entries: int = 0
    valid_entries: int = 0

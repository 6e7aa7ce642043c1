"""
Dispatch Models - Data types for multi-modal dispatch.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, model_validator


class MediaBlob(BaseModel):
    """Opaque media payload; size/type checks happen at acquisition time."""

    data: bytes
    mime_type: str
    byte_size: int = 0
    file_name: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _fill_size(cls, values: Any) -> Any:
        if isinstance(values, dict) and not values.get("byte_size"):
            data = values.get("data") or b""
            values = {**values, "byte_size": len(data)}
        return values


class MultimediaRequest(BaseModel):
    """Inbound multi-modal message, consumed once by the dispatcher."""

    text: str | None = None
    images: list[MediaBlob] = Field(default_factory=list)
    audio: MediaBlob | None = None
    participant_id: str | None = None
    timezone_hint: str | None = None


class NormalizedResponse(BaseModel):
    """Agent output in one shape regardless of modality."""

    text: str
    used_web_search: bool = False
    step_count: int = 1
    media_processed: bool = False
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

"""
Conversation Models - Data types for conversation domain.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Who authored a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Modality(str, Enum):
    """Medium of a message."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"


class ConversationMessage(BaseModel):
    """One turn in a conversation; never mutated after creation."""

    id: str
    text: str
    participant_id: str
    participant_name: str = "User"
    role: Role
    modality: Modality = Modality.TEXT
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    media_ref: str | None = None

    model_config = {"frozen": True}

    @property
    def has_media(self) -> bool:
        return self.modality in (Modality.IMAGE, Modality.AUDIO)


class HistoryStats(BaseModel):
    """Aggregate history counters for diagnostics."""

    total_conversations: int = 0
    total_messages: int = 0
    media_message_count: int = 0


class UserSettings(BaseModel):
    """Per-user preferences."""

    timezone: str | None = None
    language: str | None = None


class SettingsStats(BaseModel):
    """Aggregate settings counters."""

    total_users: int = 0
    users_with_timezone: int = 0

"""
Conversation Contracts - Interfaces for conversation domain.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import ConversationMessage, HistoryStats, Modality


@runtime_checkable
class ConversationStore(Protocol):
    """Contract for bounded per-conversation message logs."""

    def append_user(
        self,
        conversation_id: str,
        text: str,
        participant_id: str,
        modality: Modality = Modality.TEXT,
        media_ref: str | None = None,
        participant_name: str | None = None,
    ) -> ConversationMessage:
        """Append a user turn."""
        ...

    def append_assistant(self, conversation_id: str, text: str) -> ConversationMessage:
        """Append an assistant turn (always text)."""
        ...

    def recent(self, conversation_id: str) -> list[ConversationMessage]:
        """
        Most recent messages, oldest first.

        Args:
            conversation_id: Conversation identifier

        Returns:
            At most the configured limit of messages
        """
        ...

    def clear(self, conversation_id: str) -> None:
        """Drop all history for a conversation."""
        ...

    def stats(self) -> HistoryStats:
        """Aggregate counters."""
        ...

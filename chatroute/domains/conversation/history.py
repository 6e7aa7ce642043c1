"""
Conversation Context - Bounded in-memory message log per conversation.

Storage for a conversation may grow to twice the limit before one trim
drops the oldest messages back down to exactly the limit, so trimming
happens once per `limit` appends rather than on every append.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Sequence

from .models import ConversationMessage, HistoryStats, Modality, Role

logger = logging.getLogger(__name__)

__all__ = ["ConversationContext", "format_context", "DEFAULT_HISTORY_LIMIT"]

DEFAULT_HISTORY_LIMIT = 7
ASSISTANT_ID = "0"
ASSISTANT_NAME = "AI Assistant"

MEDIA_MARKERS = {
    Modality.IMAGE: " [User sent an image]",
    Modality.AUDIO: " [User sent audio message]",
}


def format_context(messages: Sequence[ConversationMessage]) -> str:
    """Render history as a prompt preamble; empty history renders as ""."""
    if not messages:
        return ""

    lines = []
    for msg in messages:
        speaker = "User" if msg.role == Role.USER else "Assistant"
        lines.append(f"{speaker}: {msg.text}{MEDIA_MARKERS.get(msg.modality, '')}")

    return "Previous conversation context:\n" + "\n".join(lines) + "\n\n"


class ConversationContext:
    """
    Volatile per-conversation history.

    Callers serialize turns within one conversation; different
    conversations are independent.

    Example:
        >>> history = ConversationContext(limit=7)
        >>> history.append_user("chat-1", "hello", participant_id="42")
        >>> history.append_assistant("chat-1", "hi there")
        >>> [m.text for m in history.recent("chat-1")]
        ['hello', 'hi there']
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        """
        Initialize history.

        Args:
            limit: Messages returned by recent(); storage peaks at 2x this
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self._histories: dict[str, list[ConversationMessage]] = {}
        self._ids = itertools.count(1)

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
        message = ConversationMessage(
            id=f"user_{next(self._ids)}",
            text=text,
            participant_id=str(participant_id),
            participant_name=participant_name or "User",
            role=Role.USER,
            modality=modality,
            media_ref=media_ref,
        )
        self._append(conversation_id, message)
        return message

    def append_assistant(self, conversation_id: str, text: str) -> ConversationMessage:
        """Append an assistant turn."""
        message = ConversationMessage(
            id=f"assistant_{next(self._ids)}",
            text=text,
            participant_id=ASSISTANT_ID,
            participant_name=ASSISTANT_NAME,
            role=Role.ASSISTANT,
            modality=Modality.TEXT,
        )
        self._append(conversation_id, message)
        return message

    def recent(self, conversation_id: str) -> list[ConversationMessage]:
        """Last `limit` messages, most recent last."""
        history = self._histories.get(conversation_id, [])
        return history[-self.limit :]

    def clear(self, conversation_id: str) -> None:
        """Drop all history for a conversation."""
        removed = self._histories.pop(conversation_id, None)
        if removed is not None:
            logger.info("Cleared %d messages for conversation %s", len(removed), conversation_id)

    def stats(self) -> HistoryStats:
        """Conversation, message, and media-message counts."""
        histories = list(self._histories.values())
        return HistoryStats(
            total_conversations=len(histories),
            total_messages=sum(len(h) for h in histories),
            media_message_count=sum(1 for h in histories for m in h if m.has_media),
        )

    def _append(self, conversation_id: str, message: ConversationMessage) -> None:
        history = self._histories.setdefault(conversation_id, [])
        history.append(message)

        if len(history) > self.limit * 2:
            excess = len(history) - self.limit
            del history[:excess]
            logger.debug("Trimmed %d messages from conversation %s", excess, conversation_id)

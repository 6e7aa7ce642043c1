"""
Conversation Domain - Short-lived per-chat context.

This domain handles:
- Bounded per-conversation message history
- Prompt context rendering
- Per-user timezone/language preferences
"""

from .contracts import ConversationStore
from .history import DEFAULT_HISTORY_LIMIT, ConversationContext, format_context
from .models import (
    ConversationMessage,
    HistoryStats,
    Modality,
    Role,
    SettingsStats,
    UserSettings,
)
from .settings_store import UserSettingsStore

__all__ = [
    # Contracts
    "ConversationStore",
    # Models
    "ConversationMessage",
    "HistoryStats",
    "Modality",
    "Role",
    "UserSettings",
    "SettingsStats",
    # Implementations
    "ConversationContext",
    "UserSettingsStore",
    "format_context",
    "DEFAULT_HISTORY_LIMIT",
]

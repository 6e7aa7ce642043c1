"""
User Settings Store - Volatile per-user timezone and language preferences.
"""

from __future__ import annotations

import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import SettingsStats, UserSettings

logger = logging.getLogger(__name__)

__all__ = ["UserSettingsStore", "POPULAR_TIMEZONES"]

POPULAR_TIMEZONES = [
    "Europe/Moscow",
    "Europe/London",
    "America/New_York",
    "America/Los_Angeles",
    "Asia/Tokyo",
    "Asia/Shanghai",
    "Europe/Berlin",
    "Australia/Sydney",
]


class UserSettingsStore:
    """In-memory user preferences keyed by participant id."""

    def __init__(self) -> None:
        self._settings: dict[str, UserSettings] = {}

    def set_timezone(self, user_id: str, timezone: str) -> bool:
        """Store a timezone if it is a known IANA name."""
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            logger.warning("Invalid timezone for user %s: %s", user_id, timezone)
            return False

        current = self._settings.get(user_id, UserSettings())
        self._settings[user_id] = current.model_copy(update={"timezone": timezone})
        return True

    def get_timezone(self, user_id: str) -> str | None:
        return self.get(user_id).timezone

    def set_language(self, user_id: str, language: str) -> None:
        current = self._settings.get(user_id, UserSettings())
        self._settings[user_id] = current.model_copy(update={"language": language})

    def get_language(self, user_id: str) -> str | None:
        return self.get(user_id).language

    def get(self, user_id: str) -> UserSettings:
        return self._settings.get(user_id, UserSettings())

    def clear(self, user_id: str) -> None:
        self._settings.pop(user_id, None)

    def stats(self) -> SettingsStats:
        return SettingsStats(
            total_users=len(self._settings),
            users_with_timezone=sum(1 for s in self._settings.values() if s.timezone),
        )

    @staticmethod
    def popular_timezones() -> list[str]:
        return list(POPULAR_TIMEZONES)

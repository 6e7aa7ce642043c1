"""
Date/time context strings so providers resolve "today" in the user's zone.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

__all__ = ["resolve_timezone", "format_datetime_context"]


def resolve_timezone(timezone_hint: str | None) -> tuple[str, ZoneInfo]:
    """Return (name, zone); unknown or missing names fall back to UTC."""
    if timezone_hint:
        try:
            return timezone_hint, ZoneInfo(timezone_hint)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            logger.warning("Unknown timezone %r, using UTC", timezone_hint)
    return "UTC", ZoneInfo("UTC")


def format_datetime_context(
    timezone_hint: str | None = None,
    now: datetime | None = None,
) -> str:
    """
    Build the date/time block prepended to search and agent prompts.

    Args:
        timezone_hint: IANA timezone name, e.g. "Europe/Moscow"
        now: Override current instant (aware datetime)

    Returns:
        Multi-line context string
    """
    now = now or datetime.now(timezone.utc)
    name, zone = resolve_timezone(timezone_hint)
    local = now.astimezone(zone)
    utc = now.astimezone(timezone.utc)

    return (
        f"Current date and time: {local.strftime('%B %d, %Y, %H:%M:%S %Z')}\n"
        f"Day of the week: {local.strftime('%A')}\n"
        f"Timezone: {name}\n"
        f"UTC time: {utc.isoformat()}"
    )

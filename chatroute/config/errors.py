"""
Error Taxonomy - Consistent error codes across the application.

Usage:
    from chatroute.config.errors import ErrorCode, ChatRouteError

    raise ChatRouteError(ErrorCode.PROVIDER_UNAVAILABLE, "Search backend down")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Provider errors
    PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"
    PROVIDER_RATE_LIMITED = "PROVIDER_RATE_LIMITED"
    PROVIDER_INVALID_RESPONSE = "PROVIDER_INVALID_RESPONSE"

    # Dispatch errors
    DISPATCH_UNSUPPORTED_SHAPE = "DISPATCH_UNSUPPORTED_SHAPE"

    # Agent errors
    AGENT_FAILED = "AGENT_FAILED"
    AGENT_MISSING_MEDIA = "AGENT_MISSING_MEDIA"

    # General errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ChatRouteError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a serializable dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ProviderError(ChatRouteError):
    """Remote model/search provider failed (transport, quota, payload)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.PROVIDER_UNAVAILABLE, message, details)


class UnsupportedRequestShape(ChatRouteError):
    """Multimedia request carried neither audio nor images."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.DISPATCH_UNSUPPORTED_SHAPE, message, details)


class AgentError(ChatRouteError):
    """Model agent could not produce a response."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.AGENT_FAILED,
    ) -> None:
        super().__init__(code, message, details)


class ConfigurationError(ChatRouteError):
    """Missing or invalid configuration."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.CONFIGURATION_ERROR, message, details)

"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    AgentError,
    ChatRouteError,
    ConfigurationError,
    ErrorCode,
    ProviderError,
    UnsupportedRequestShape,
)
from .settings import SearchBackend, Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "SearchBackend",
    "get_settings",
    # Errors
    "ErrorCode",
    "ChatRouteError",
    "ProviderError",
    "UnsupportedRequestShape",
    "AgentError",
    "ConfigurationError",
]

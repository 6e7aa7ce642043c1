"""
Tests for configuration and error taxonomy.
"""

import pytest
from pydantic import ValidationError

from .errors import (
    AgentError,
    ChatRouteError,
    ConfigurationError,
    ErrorCode,
    ProviderError,
    UnsupportedRequestShape,
)
from .settings import SearchBackend, Settings


# --- Settings Tests ---


def test_settings_defaults() -> None:
    """Test defaults when no environment file is read."""
    settings = Settings(_env_file=None, chat_history_limit=7)
    assert settings.search_backend == SearchBackend.OPENROUTER
    assert settings.chat_history_limit == 7
    assert settings.openrouter_base_url == "https://openrouter.ai/api/v1"


@pytest.mark.parametrize("limit", [0, 21])
def test_settings_history_limit_bounds(limit: int) -> None:
    """Test history limit must stay within 1..20."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, chat_history_limit=limit)


def test_settings_backend_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test search backend is read from the environment."""
    monkeypatch.setenv("SEARCH_BACKEND", "gemini")
    settings = Settings(_env_file=None)
    assert settings.search_backend == SearchBackend.GEMINI


# --- Error Tests ---


def test_error_to_dict() -> None:
    """Test error serialization."""
    error = ChatRouteError(ErrorCode.INTERNAL_ERROR, "boom", {"k": 1})
    assert error.to_dict() == {
        "code": "INTERNAL_ERROR",
        "message": "boom",
        "details": {"k": 1},
    }
    assert str(error) == "[INTERNAL_ERROR] boom"


def test_error_subclass_codes() -> None:
    """Test each subclass carries its fixed code."""
    assert ProviderError("x").code == ErrorCode.PROVIDER_UNAVAILABLE
    assert UnsupportedRequestShape("x").code == ErrorCode.DISPATCH_UNSUPPORTED_SHAPE
    assert ConfigurationError("x").code == ErrorCode.CONFIGURATION_ERROR
    assert AgentError("x").code == ErrorCode.AGENT_FAILED
    assert AgentError("x", code=ErrorCode.AGENT_MISSING_MEDIA).code == ErrorCode.AGENT_MISSING_MEDIA


def test_error_details_default_empty() -> None:
    """Test details default to an empty dict."""
    assert ProviderError("x").details == {}

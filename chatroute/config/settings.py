"""
Settings - Application configuration using Pydantic Settings.

Loads from environment variables and .env files.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchBackend(str, Enum):
    """Which provider family serves web-search tiers."""

    OPENROUTER = "openrouter"  # Perplexity online models via OpenRouter
    GEMINI = "gemini"  # Gemini with Google Search grounding


class Settings(BaseSettings):
    """Application settings."""

    # Gemini (agents and optional grounded search)
    gemini_api_key: str = ""
    gemini_text_model: str = "gemini-2.5-pro"
    gemini_image_model: str = "gemini-2.5-flash"
    gemini_audio_model: str = "gemini-2.5-flash"
    gemini_search_model: str = "gemini-2.0-flash"
    gemini_rate_limit_rpm: int = 60

    # OpenRouter (web search tiers)
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_referer: str = "https://telegrambot.ai"
    openrouter_title: str = "Telegram AI Agent"
    search_basic_model: str = "perplexity/llama-3.1-sonar-small-128k-online"
    search_advanced_model: str = "perplexity/llama-3.1-sonar-large-128k-online"

    # Search
    search_backend: SearchBackend = SearchBackend.OPENROUTER
    http_timeout_seconds: float = 60.0

    # Conversation
    chat_history_limit: int = Field(default=7, ge=1, le=20)

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""
Gemini Adapter - Unified Google Gemini API client.

This is the ONLY place that calls the Gemini API.
All agents use this adapter for model operations.
"""

from .client import GeminiAPIError, GeminiClient, RateLimitError
from .models import GeminiConfig, GeminiResponse, ToolSpec

__all__ = [
    "GeminiClient",
    "GeminiConfig",
    "GeminiResponse",
    "ToolSpec",
    "GeminiAPIError",
    "RateLimitError",
]

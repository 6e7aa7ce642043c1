"""
OpenRouter Adapter - OpenAI-compatible gateway used for web-search tiers.
"""

from .client import OpenRouterClient, OpenRouterError, OpenRouterRateLimitError

__all__ = ["OpenRouterClient", "OpenRouterError", "OpenRouterRateLimitError"]

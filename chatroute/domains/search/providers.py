"""
Search Providers - Bind model adapters to the SearchProvider contract.

Adapters (chatroute.adapters.*) own the wire protocol; these thin classes
only pin which model serves which tier.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chatroute.config import SearchBackend, Settings

if TYPE_CHECKING:
    from chatroute.adapters.gemini import GeminiClient
    from chatroute.adapters.openrouter import OpenRouterClient

    from .router import SearchRouter

logger = logging.getLogger(__name__)

__all__ = [
    "OpenRouterSearchProvider",
    "GeminiGroundedSearchProvider",
    "build_search_router",
]


class OpenRouterSearchProvider:
    """Perplexity (or any OpenRouter chat model) as a search tier."""

    def __init__(self, client: OpenRouterClient, model: str) -> None:
        self._client = client
        self.model = model

    async def generate(
        self,
        prompt: str,
        system_context: str | None = None,
        token_budget: int = 6000,
        temperature: float = 0.3,
    ) -> str:
        return await self._client.complete(
            model=self.model,
            prompt=prompt,
            system=system_context,
            max_tokens=token_budget,
            temperature=temperature,
        )


class GeminiGroundedSearchProvider:
    """Gemini with Google Search grounding as a search tier."""

    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    async def generate(
        self,
        prompt: str,
        system_context: str | None = None,
        token_budget: int = 2048,
        temperature: float = 0.3,
    ) -> str:
        response = await self._client.generate(
            prompt,
            system_instruction=system_context,
            max_output_tokens=token_budget,
            temperature=temperature,
            grounded=True,
        )
        return response.text


def build_search_router(
    settings: Settings,
    gemini: GeminiClient | None = None,
    openrouter: OpenRouterClient | None = None,
) -> SearchRouter:
    """
    Wire a SearchRouter for the configured backend.

    Args:
        settings: Application settings
        gemini: Gemini client (required for the gemini backend)
        openrouter: OpenRouter client (created from settings if omitted)

    Returns:
        SearchRouter with basic and advanced providers bound
    """
    from .router import SearchRouter

    if settings.search_backend == SearchBackend.GEMINI:
        if gemini is None:
            from chatroute.adapters.gemini import GeminiClient, GeminiConfig

            gemini = GeminiClient(
                GeminiConfig(
                    model=settings.gemini_search_model,
                    rate_limit_rpm=settings.gemini_rate_limit_rpm,
                ),
                api_key=settings.gemini_api_key or None,
            )
        provider = GeminiGroundedSearchProvider(gemini)
        logger.info("Search backend: Gemini grounding (%s)", gemini.config.model)
        return SearchRouter(provider, provider)

    if openrouter is None:
        from chatroute.adapters.openrouter import OpenRouterClient

        openrouter = OpenRouterClient.from_settings(settings)

    logger.info(
        "Search backend: OpenRouter (basic=%s, advanced=%s)",
        settings.search_basic_model,
        settings.search_advanced_model,
    )
    return SearchRouter(
        basic_provider=OpenRouterSearchProvider(openrouter, settings.search_basic_model),
        advanced_provider=OpenRouterSearchProvider(openrouter, settings.search_advanced_model),
    )

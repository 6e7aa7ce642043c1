"""
Text Agent - Gemini text generation with a web-search tool.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chatroute.config import AgentError
from chatroute.domains.dispatch import NormalizedResponse
from chatroute.domains.search import format_datetime_context

from .prompts import SYSTEM_MAIN
from .tools import web_search_tool

if TYPE_CHECKING:
    from chatroute.adapters.gemini import GeminiClient
    from chatroute.domains.search import WebSearch

logger = logging.getLogger(__name__)

__all__ = ["GeminiTextAgent"]

MAX_STEPS = 5
MAX_TOKENS = 10000
TEMPERATURE = 0.7


class GeminiTextAgent:
    """
    Answers text prompts, calling web search mid-generation when the
    model decides it needs live data.
    """

    name = "GeminiTextAgent"

    def __init__(self, client: GeminiClient, search: WebSearch) -> None:
        """
        Initialize text agent.

        Args:
            client: Gemini client configured with the text model
            search: Search capability exposed as a tool
        """
        self._client = client
        self._search = search

    async def process_text(
        self,
        prompt: str,
        context: str = "",
        timezone_hint: str | None = None,
    ) -> NormalizedResponse:
        """Generate a reply to prompt given rendered history context."""
        full_prompt = (
            f"{format_datetime_context(timezone_hint)}\n\n"
            f"{context}Current user question: {prompt}"
        )

        try:
            response = await self._client.generate_with_tools(
                [full_prompt],
                tools=[web_search_tool(self._search, timezone_hint)],
                system_instruction=SYSTEM_MAIN,
                max_steps=MAX_STEPS,
                max_output_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
        except Exception as e:
            logger.error("Error generating AI response: %s", e)
            raise AgentError("Failed to generate AI response") from e

        return NormalizedResponse(
            text=response.text,
            used_web_search=response.used_tools,
            step_count=response.steps,
            media_processed=False,
        )

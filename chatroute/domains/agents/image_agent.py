"""
Image Agent - Gemini vision analysis with a web-search tool.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chatroute.config import AgentError, ErrorCode
from chatroute.domains.dispatch import MediaBlob, NormalizedResponse
from chatroute.domains.search import format_datetime_context

from .prompts import IMAGE_ANALYZE_DEFAULT, SYSTEM_IMAGE_ANALYSIS
from .tools import web_search_tool

if TYPE_CHECKING:
    from chatroute.adapters.gemini import GeminiClient
    from chatroute.domains.search import WebSearch

logger = logging.getLogger(__name__)

__all__ = ["GeminiImageAgent"]

MAX_STEPS = 5
MAX_TOKENS = 10000
TEMPERATURE = 1.0


class GeminiImageAgent:
    """Analyzes one image, optionally answering a question about it."""

    name = "GeminiImageAgent"

    def __init__(self, client: GeminiClient, search: WebSearch) -> None:
        self._client = client
        self._search = search

    async def analyze_image(
        self,
        image: MediaBlob,
        prompt: str | None = None,
        timezone_hint: str | None = None,
    ) -> NormalizedResponse:
        """Analyze image data; empty payloads are rejected."""
        if not image.data:
            raise AgentError("Image data not found", code=ErrorCode.AGENT_MISSING_MEDIA)

        system = f"{SYSTEM_IMAGE_ANALYSIS}\n\nCurrent context: {format_datetime_context(timezone_hint)}"
        parts = [
            prompt or IMAGE_ANALYZE_DEFAULT,
            {"mime_type": image.mime_type, "data": image.data},
        ]

        try:
            response = await self._client.generate_with_tools(
                parts,
                tools=[web_search_tool(self._search, timezone_hint)],
                system_instruction=system,
                max_steps=MAX_STEPS,
                max_output_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
        except Exception as e:
            logger.error("Image processing failed (%d bytes): %s", image.byte_size, e)
            raise AgentError("Failed to analyze image") from e

        logger.info("Processed image data: %d bytes", image.byte_size)
        return NormalizedResponse(
            text=response.text,
            used_web_search=response.used_tools,
            step_count=response.steps,
            media_processed=True,
        )

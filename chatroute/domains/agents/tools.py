"""
Agent Tools - Capabilities injected into agents and exposed to the model.
"""

from __future__ import annotations

import logging
from typing import Any

from chatroute.adapters.gemini import ToolSpec
from chatroute.domains.search import WebSearch

from .prompts import WEB_SEARCH_DESCRIPTION, WEB_SEARCH_QUERY_DESCRIPTION

logger = logging.getLogger(__name__)

__all__ = ["web_search_tool"]


def web_search_tool(search: WebSearch, timezone_hint: str | None = None) -> ToolSpec:
    """
    Bind a search capability as the model-callable `web_search` tool.

    Args:
        search: Search service (usually the shared SearchRouter)
        timezone_hint: User timezone forwarded to every search

    Returns:
        ToolSpec for GeminiClient.generate_with_tools
    """

    async def run(query: str) -> dict[str, Any]:
        logger.info("Web search tool called: %s", query)
        result = await search.search(query, timezone_hint)
        return {
            "query": result.query,
            "results": result.result_text,
            "timestamp": result.produced_at.isoformat(),
        }

    return ToolSpec(
        name="web_search",
        description=WEB_SEARCH_DESCRIPTION,
        handler=run,
        parameters={"query": WEB_SEARCH_QUERY_DESCRIPTION},
    )

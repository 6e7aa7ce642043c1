"""
Gemini Models - Request/Response types for Gemini API.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field


class GeminiConfig(BaseModel):
    """Configuration for Gemini client."""

    model: str = Field(default="gemini-2.5-flash")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    max_output_tokens: int = Field(default=10000)
    timeout_seconds: int = Field(default=120)
    max_retries: int = Field(default=3)
    rate_limit_rpm: int = Field(default=60)

    model_config = {"frozen": True}


class GeminiResponse(BaseModel):
    """Generic Gemini API response."""

    text: str
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    steps: int = 1
    tool_calls: list[str] = Field(default_factory=list)

    @property
    def used_tools(self) -> bool:
        """More than one model round means a tool was invoked."""
        return self.steps > 1


@dataclass
class ToolSpec:
    """
    Function tool exposed to the model during generation.

    Every parameter is a string; ``handler`` receives them as keyword
    arguments and returns a JSON-serializable dict for the model.
    """

    name: str
    description: str
    handler: Callable[..., Awaitable[dict[str, Any]]]
    parameters: dict[str, str] = field(default_factory=dict)

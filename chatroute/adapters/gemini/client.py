"""
Gemini Client - Unified Google Gemini API client.

This is the SINGLE place that calls the Gemini API. Agents and the
grounded search provider go through it.

Authentication:
- API key when one is configured (GEMINI_API_KEY)
- Otherwise Application Default Credentials (`gcloud auth application-default login`)

Features:
- Async operations (SDK calls run in worker threads)
- Rate limiting (60 RPM default)
- Automatic retries with exponential backoff
- Inline media parts (images, audio)
- Function-calling loop for tools such as web search
- Google Search grounding
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import google.generativeai as genai
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    wait_exponential,
)

from .models import GeminiConfig, GeminiResponse, ToolSpec

logger = logging.getLogger(__name__)

__all__ = ["GeminiClient", "RateLimitError", "GeminiAPIError"]


class RateLimitError(Exception):
    """Rate limit exceeded."""

    pass


class GeminiAPIError(Exception):
    """Gemini API error."""

    pass


# Lowercased substrings that identify quota exhaustion in SDK errors
RATE_LIMIT_MARKERS = ("429", "rate limit", "resource_exhausted", "resource exhausted", "quota")


def _stop_after_configured_retries(retry_state: RetryCallState) -> bool:
    """Stop once the client's configured attempt count is used up."""
    client = retry_state.args[0]
    return retry_state.attempt_number >= client.config.max_retries


class GeminiClient:
    """
    Unified Gemini API client.

    Example:
        >>> client = GeminiClient(GeminiConfig(model="gemini-2.5-flash"))
        >>> response = await client.generate("What happened today?", grounded=True)
        >>> print(response.text)

        >>> # Tool calling
        >>> response = await client.generate_with_tools(
        ...     ["Who won the match yesterday?"], tools=[web_search_tool]
        ... )
        >>> print(response.text, response.steps)
    """

    def __init__(
        self,
        config: GeminiConfig | None = None,
        api_key: str | None = None,
    ) -> None:
        """
        Initialize Gemini client.

        Args:
            config: Client configuration. Uses defaults if None.
            api_key: Explicit API key; ADC is used when omitted.
        """
        self.config = config or GeminiConfig()

        if api_key:
            genai.configure(api_key=api_key)

        # Rate limiting state
        self._request_times: list[float] = []
        self._rate_lock = asyncio.Lock()

        logger.info(
            "GeminiClient initialized: model=%s, auth=%s",
            self.config.model,
            "api_key" if api_key else "adc",
        )

    def _build_model(
        self,
        system_instruction: str | None = None,
        max_output_tokens: int | None = None,
        temperature: float | None = None,
        tools: Any = None,
    ) -> genai.GenerativeModel:
        """Create a model instance for one call's generation settings."""
        generation_config: dict[str, Any] = {
            "temperature": self.config.temperature if temperature is None else temperature,
            "max_output_tokens": max_output_tokens or self.config.max_output_tokens,
        }
        if self.config.top_p is not None:
            generation_config["top_p"] = self.config.top_p

        return genai.GenerativeModel(
            model_name=self.config.model,
            generation_config=generation_config,
            system_instruction=system_instruction,
            tools=tools,
        )

    async def _check_rate_limit(self) -> None:
        """Enforce rate limiting."""
        async with self._rate_lock:
            now = time.time()
            # Remove requests older than 1 minute
            self._request_times = [t for t in self._request_times if now - t < 60]

            if len(self._request_times) >= self.config.rate_limit_rpm:
                wait_time = 60 - (now - self._request_times[0])
                if wait_time > 0:
                    logger.warning("Rate limit reached, waiting %.1fs", wait_time)
                    await asyncio.sleep(wait_time)

            self._request_times.append(now)

    async def _generate_content(self, model: genai.GenerativeModel, contents: Any) -> Any:
        """Run one SDK call off the event loop, mapping errors."""
        await self._check_rate_limit()
        try:
            return await asyncio.to_thread(
                model.generate_content,
                contents,
                request_options={"timeout": self.config.timeout_seconds},
            )
        except Exception as e:
            error_msg = str(e).lower()
            if any(marker in error_msg for marker in RATE_LIMIT_MARKERS):
                raise RateLimitError(f"Rate limit exceeded: {e}") from e
            raise GeminiAPIError(f"Gemini API error: {e}") from e

    @retry(
        retry=retry_if_exception_type((GeminiAPIError, ConnectionError)),
        stop=_stop_after_configured_retries,
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    async def generate(
        self,
        prompt: str,
        system_instruction: str | None = None,
        max_output_tokens: int | None = None,
        temperature: float | None = None,
        grounded: bool = False,
    ) -> GeminiResponse:
        """
        Generate text from prompt.

        Args:
            prompt: User prompt
            system_instruction: Optional system instruction
            max_output_tokens: Override output budget
            temperature: Override sampling temperature
            grounded: Enable Google Search grounding

        Returns:
            GeminiResponse with generated text

        Raises:
            GeminiAPIError: API call failed
            RateLimitError: Rate limit exceeded
        """
        model = self._build_model(
            system_instruction=system_instruction,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
            tools="google_search_retrieval" if grounded else None,
        )
        response = await self._generate_content(model, prompt)
        return self._to_response(response)

    @retry(
        retry=retry_if_exception_type((GeminiAPIError, ConnectionError)),
        stop=_stop_after_configured_retries,
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    async def generate_with_media(
        self,
        prompt: str,
        data: bytes,
        mime_type: str,
        system_instruction: str | None = None,
    ) -> GeminiResponse:
        """
        Generate from a text prompt plus one inline media blob.

        Args:
            prompt: Instruction for the media
            data: Raw media bytes
            mime_type: Media MIME type, e.g. "audio/ogg"
            system_instruction: Optional system instruction

        Returns:
            GeminiResponse with generated text
        """
        model = self._build_model(system_instruction=system_instruction)
        contents = [prompt, {"mime_type": mime_type, "data": data}]
        response = await self._generate_content(model, contents)
        return self._to_response(response)

    async def generate_with_tools(
        self,
        parts: list[Any],
        tools: list[ToolSpec],
        system_instruction: str | None = None,
        max_steps: int = 5,
        max_output_tokens: int | None = None,
        temperature: float | None = None,
    ) -> GeminiResponse:
        """
        Generate with function tools, executing calls until the model answers.

        Args:
            parts: User content parts (text and/or inline media dicts)
            tools: Tools the model may call
            system_instruction: Optional system instruction
            max_steps: Maximum model rounds, tool rounds included
            max_output_tokens: Override output budget
            temperature: Override sampling temperature

        Returns:
            GeminiResponse whose ``steps`` counts model rounds
        """
        handlers = {tool.name: tool for tool in tools}
        model = self._build_model(
            system_instruction=system_instruction,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
            tools=[self._tool_declaration(tools)] if tools else None,
        )

        contents: list[Any] = [{"role": "user", "parts": parts}]
        tool_calls: list[str] = []
        prompt_tokens = completion_tokens = 0
        response: Any = None
        steps = 0

        while steps < max_steps:
            response = await self._generate_content(model, contents)
            steps += 1
            usage = getattr(response, "usage_metadata", None)
            prompt_tokens += getattr(usage, "prompt_token_count", 0) or 0
            completion_tokens += getattr(usage, "candidates_token_count", 0) or 0

            calls = self._function_calls(response)
            if not calls:
                break

            contents.append(response.candidates[0].content)
            replies = []
            for call in calls:
                tool_calls.append(call.name)
                output = await self._run_tool(handlers, call)
                replies.append(
                    genai.protos.Part(
                        function_response=genai.protos.FunctionResponse(
                            name=call.name,
                            response=output,
                        )
                    )
                )
            contents.append({"role": "user", "parts": replies})

        return GeminiResponse(
            text=self._extract_text(response),
            model=self.config.model,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
            steps=steps,
            tool_calls=tool_calls,
        )

    async def _run_tool(self, handlers: dict[str, ToolSpec], call: Any) -> dict[str, Any]:
        """Execute one function call; unknown tools get an error payload."""
        tool = handlers.get(call.name)
        if tool is None:
            logger.warning("Model called unknown tool: %s", call.name)
            return {"error": f"unknown tool {call.name}"}

        args = {key: str(value) for key, value in dict(call.args).items()}
        logger.info("Tool call: %s(%s)", call.name, args)
        try:
            return await tool.handler(**args)
        except TypeError as e:
            logger.warning("Invalid arguments for tool %s: %s", call.name, e)
            return {"error": f"invalid arguments for {call.name}"}

    @staticmethod
    def _tool_declaration(tools: list[ToolSpec]) -> Any:
        """Translate ToolSpecs into a Gemini Tool proto."""
        declarations = [
            genai.protos.FunctionDeclaration(
                name=tool.name,
                description=tool.description,
                parameters=genai.protos.Schema(
                    type=genai.protos.Type.OBJECT,
                    properties={
                        param: genai.protos.Schema(
                            type=genai.protos.Type.STRING,
                            description=description,
                        )
                        for param, description in tool.parameters.items()
                    },
                    required=list(tool.parameters),
                ),
            )
            for tool in tools
        ]
        return genai.protos.Tool(function_declarations=declarations)

    @staticmethod
    def _function_calls(response: Any) -> list[Any]:
        """Function calls requested in the first candidate, if any."""
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []
        parts = getattr(candidates[0].content, "parts", None) or []
        calls = []
        for part in parts:
            call = getattr(part, "function_call", None)
            if call and getattr(call, "name", ""):
                calls.append(call)
        return calls

    @staticmethod
    def _extract_text(response: Any) -> str:
        """Join text parts; `response.text` raises when parts are not text."""
        if response is None:
            return ""
        candidates = getattr(response, "candidates", None) or []
        if candidates:
            parts = getattr(candidates[0].content, "parts", None) or []
            texts = [p.text for p in parts if isinstance(getattr(p, "text", None), str)]
            if texts:
                return "".join(texts)
        try:
            return response.text
        except ValueError:
            return ""

    def _to_response(self, response: Any) -> GeminiResponse:
        """Wrap an SDK response with usage stats."""
        usage = getattr(response, "usage_metadata", None)
        prompt_tokens = getattr(usage, "prompt_token_count", 0) if usage else 0
        completion_tokens = getattr(usage, "candidates_token_count", 0) if usage else 0

        return GeminiResponse(
            text=self._extract_text(response),
            model=self.config.model,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        )

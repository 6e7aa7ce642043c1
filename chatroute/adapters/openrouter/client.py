"""
OpenRouter Client - OpenAI-compatible chat completions over HTTP.

Serves the web-search tiers (Perplexity online models) through
https://openrouter.ai/api/v1/chat/completions.

Features:
- Async HTTP client (reused across calls)
- Status-aware error mapping (quota vs. transport vs. payload)
- Automatic retries with exponential backoff on transient failures
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from chatroute.config import ConfigurationError, ProviderError

if TYPE_CHECKING:
    from chatroute.config import Settings

logger = logging.getLogger(__name__)

__all__ = ["OpenRouterClient", "OpenRouterError", "OpenRouterRateLimitError"]


class OpenRouterError(ProviderError):
    """OpenRouter request failed."""


class OpenRouterRateLimitError(OpenRouterError):
    """Quota or rate limit exceeded (HTTP 429)."""


class OpenRouterClient:
    """
    OpenRouter chat-completions client.

    Example:
        >>> client = OpenRouterClient(api_key="sk-or-...")
        >>> text = await client.complete(
        ...     model="perplexity/llama-3.1-sonar-large-128k-online",
        ...     prompt="Latest news about the Mars mission",
        ... )
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        timeout: float = 60.0,
        referer: str | None = None,
        title: str | None = None,
    ) -> None:
        """
        Initialize OpenRouter client.

        Args:
            api_key: OpenRouter API key
            base_url: API root
            timeout: Request timeout in seconds
            referer: Optional HTTP-Referer attribution header
            title: Optional X-Title attribution header
        """
        if not api_key:
            raise ConfigurationError("OPENROUTER_API_KEY is required")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        if referer:
            self._headers["HTTP-Referer"] = referer
        if title:
            self._headers["X-Title"] = title
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> OpenRouterClient:
        """Build a client from application settings."""
        return cls(
            api_key=settings.openrouter_api_key,
            base_url=settings.openrouter_base_url,
            timeout=settings.http_timeout_seconds,
            referer=settings.openrouter_referer,
            title=settings.openrouter_title,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self.timeout,
            )
        return self._client

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        client = await self._get_client()
        return await client.post("/chat/completions", json=payload)

    async def complete(
        self,
        model: str,
        prompt: str,
        system: str | None = None,
        max_tokens: int = 6000,
        temperature: float = 0.3,
    ) -> str:
        """
        Run one chat completion.

        Args:
            model: OpenRouter model id
            prompt: User message
            system: Optional system message
            max_tokens: Output token budget
            temperature: Sampling temperature

        Returns:
            Assistant message text

        Raises:
            OpenRouterRateLimitError: HTTP 429
            OpenRouterError: transport failure, non-200 status, or malformed body
        """
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        try:
            response = await self._post(payload)
        except httpx.TransportError as e:
            raise OpenRouterError(f"OpenRouter transport error: {e}") from e

        if response.status_code == 429:
            raise OpenRouterRateLimitError(
                "OpenRouter quota exceeded", {"status": response.status_code}
            )
        if response.status_code != 200:
            logger.error("OpenRouter error: %s %s", response.status_code, response.text)
            raise OpenRouterError(
                f"OpenRouter API error: {response.status_code}",
                {"status": response.status_code},
            )

        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: httpx.Response) -> str:
        """Pull the first choice's content out of a completion body."""
        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise OpenRouterError(f"Malformed OpenRouter response: {e}") from e

        if not isinstance(content, str):
            raise OpenRouterError("OpenRouter response content is not text")

        usage = data.get("usage") or {}
        logger.debug("OpenRouter tokens used: %s", usage.get("total_tokens"))
        return content

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

"""
Dispatch Contracts - Agent interfaces the dispatcher routes to.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import MediaBlob, MultimediaRequest, NormalizedResponse


@runtime_checkable
class TextAgent(Protocol):
    """Contract for text generation agents."""

    async def process_text(
        self,
        prompt: str,
        context: str = "",
        timezone_hint: str | None = None,
    ) -> NormalizedResponse:
        """Answer a text prompt, optionally with history context."""
        ...


@runtime_checkable
class AudioAgent(Protocol):
    """Contract for audio agents."""

    async def process_audio(self, audio: MediaBlob, prompt: str | None = None) -> str:
        """
        Process an audio clip.

        Args:
            audio: Audio payload
            prompt: Optional steering prompt

        Returns:
            Response text
        """
        ...

    async def transcribe_only(self, audio: MediaBlob) -> str:
        """Verbatim transcription."""
        ...


@runtime_checkable
class ImageAgent(Protocol):
    """Contract for image agents."""

    async def analyze_image(
        self,
        image: MediaBlob,
        prompt: str | None = None,
        timezone_hint: str | None = None,
    ) -> NormalizedResponse:
        """
        Analyze one image.

        Args:
            image: Image payload
            prompt: Optional question about the image
            timezone_hint: User timezone for date context

        Returns:
            NormalizedResponse including the agent's own search usage
        """
        ...


@runtime_checkable
class MultimediaDispatcher(Protocol):
    """Contract for routing multi-modal requests."""

    async def dispatch(self, request: MultimediaRequest) -> NormalizedResponse:
        """Route a request to one single-modality agent."""
        ...

"""
Audio Agent - Gemini voice-message processing.

Audio is sent inline with its original MIME type; Gemini accepts the
common voice formats (OGG/Opus, MP3, WAV) directly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chatroute.config import AgentError, ErrorCode
from chatroute.domains.dispatch import MediaBlob

from .prompts import (
    AUDIO_TRANSCRIBE_AND_RESPOND,
    AUDIO_TRANSCRIBE_ONLY,
    SYSTEM_AUDIO_PROCESSING,
)

if TYPE_CHECKING:
    from chatroute.adapters.gemini import GeminiClient

logger = logging.getLogger(__name__)

__all__ = ["GeminiAudioAgent"]


class GeminiAudioAgent:
    """Transcribes and responds to audio clips."""

    name = "GeminiAudioAgent"

    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    async def process_audio(self, audio: MediaBlob, prompt: str | None = None) -> str:
        """Process audio with an optional steering prompt."""
        if not audio.data:
            raise AgentError("Audio data not found", code=ErrorCode.AGENT_MISSING_MEDIA)

        logger.info("Processing audio: %s, %d bytes", audio.mime_type, audio.byte_size)

        try:
            response = await self._client.generate_with_media(
                prompt or AUDIO_TRANSCRIBE_AND_RESPOND,
                data=audio.data,
                mime_type=audio.mime_type,
                system_instruction=SYSTEM_AUDIO_PROCESSING,
            )
        except Exception as e:
            logger.error("Error processing audio: %s", e)
            raise AgentError("Failed to process audio message") from e

        return response.text

    async def transcribe_only(self, audio: MediaBlob) -> str:
        """Verbatim transcription, no commentary."""
        return await self.process_audio(audio, AUDIO_TRANSCRIBE_ONLY)

"""
Modality Dispatcher - Route multi-modal requests to one agent.

Priority (first match wins):
    1. audio and no images -> audio agent
    2. any images          -> image agent, first image only
    3. otherwise           -> UnsupportedRequestShape

Text-only requests never reach this component; they go straight to the
text agent upstream, so rule 3 signals a wiring defect.
"""

from __future__ import annotations

import logging

from chatroute.config import UnsupportedRequestShape

from .contracts import AudioAgent, ImageAgent
from .models import MultimediaRequest, NormalizedResponse

logger = logging.getLogger(__name__)

__all__ = ["ModalityDispatcher"]


class ModalityDispatcher:
    """Stateless routing policy over injected audio and image agents."""

    def __init__(self, audio_agent: AudioAgent, image_agent: ImageAgent) -> None:
        """
        Initialize dispatcher.

        Args:
            audio_agent: Handles voice/audio requests
            image_agent: Handles image requests
        """
        self._audio = audio_agent
        self._image = image_agent

    async def dispatch(self, request: MultimediaRequest) -> NormalizedResponse:
        """Route a request and normalize the result."""
        if request.audio is not None and not request.images:
            logger.info("Dispatching audio (%d bytes)", request.audio.byte_size)
            text = await self._audio.process_audio(request.audio, request.text or None)
            return NormalizedResponse(
                text=text,
                used_web_search=False,
                step_count=1,
                media_processed=True,
            )

        if request.images:
            if len(request.images) > 1:
                logger.info(
                    "Dispatching first of %d images; the rest are ignored",
                    len(request.images),
                )
            return await self._image.analyze_image(
                request.images[0],
                request.text or None,
                request.timezone_hint,
            )

        raise UnsupportedRequestShape(
            "Multimedia request needs audio or at least one image",
            {"has_text": bool(request.text)},
        )

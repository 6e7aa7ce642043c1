"""
Service Factory - Wire adapters, domains, and the assistant service.

Every shared store (search cache, history, user settings) is created once
here and injected; nothing relies on module-level state.
"""

from __future__ import annotations

import logging

from chatroute.adapters.gemini import GeminiClient, GeminiConfig
from chatroute.config import Settings, get_settings
from chatroute.domains.agents import GeminiAudioAgent, GeminiImageAgent, GeminiTextAgent
from chatroute.domains.conversation import ConversationContext, UserSettingsStore
from chatroute.domains.dispatch import ModalityDispatcher
from chatroute.domains.search import SearchRouter, build_search_router

from .service import AssistantService

logger = logging.getLogger(__name__)

__all__ = ["build_assistant"]


def build_assistant(
    settings: Settings | None = None,
    search: SearchRouter | None = None,
) -> AssistantService:
    """
    Build a fully wired AssistantService.

    Args:
        settings: Application settings (cached env settings if omitted)
        search: Pre-built search router to share

    Returns:
        AssistantService ready for turns
    """
    settings = settings or get_settings()
    api_key = settings.gemini_api_key or None

    def client(model: str, temperature: float, top_p: float | None = None) -> GeminiClient:
        return GeminiClient(
            GeminiConfig(
                model=model,
                temperature=temperature,
                top_p=top_p,
                rate_limit_rpm=settings.gemini_rate_limit_rpm,
            ),
            api_key=api_key,
        )

    search = search or build_search_router(settings)

    text_agent = GeminiTextAgent(client(settings.gemini_text_model, 0.7), search)
    image_agent = GeminiImageAgent(client(settings.gemini_image_model, 1.0, 0.95), search)
    audio_agent = GeminiAudioAgent(client(settings.gemini_audio_model, 0.7))

    logger.info(
        "Assistant wired: text=%s, image=%s, audio=%s, history_limit=%d",
        settings.gemini_text_model,
        settings.gemini_image_model,
        settings.gemini_audio_model,
        settings.chat_history_limit,
    )

    return AssistantService(
        text_agent=text_agent,
        audio_agent=audio_agent,
        dispatcher=ModalityDispatcher(audio_agent, image_agent),
        history=ConversationContext(limit=settings.chat_history_limit),
        user_settings=UserSettingsStore(),
        search=search,
    )

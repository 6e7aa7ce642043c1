"""
Assistant Service - Per-turn orchestration across domains.

Coordinates:
- Conversation history (context in, reply out)
- Text agent for plain messages
- Modality dispatcher for voice/image messages
- Operator diagnostics (cache and history stats)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chatroute.domains.conversation import Modality, format_context
from chatroute.domains.dispatch import MultimediaRequest

if TYPE_CHECKING:
    from chatroute.domains.conversation import (
        ConversationStore,
        HistoryStats,
        UserSettingsStore,
    )
    from chatroute.domains.dispatch import (
        AudioAgent,
        MediaBlob,
        MultimediaDispatcher,
        NormalizedResponse,
        TextAgent,
    )
    from chatroute.domains.search import CacheStats, SearchDiagnostics

logger = logging.getLogger(__name__)

__all__ = ["AssistantService"]


class AssistantService:
    """
    Turn handler invoked by the transport layer.

    Callers must serialize turns within one conversation so history
    stays causally ordered.
    """

    def __init__(
        self,
        text_agent: TextAgent,
        audio_agent: AudioAgent,
        dispatcher: MultimediaDispatcher,
        history: ConversationStore,
        user_settings: UserSettingsStore,
        search: SearchDiagnostics,
    ) -> None:
        """
        Initialize service.

        Args:
            text_agent: Agent for text-only messages
            audio_agent: Agent used for plain transcription
            dispatcher: Routes multi-modal requests
            history: Conversation history store
            user_settings: Per-user preferences (timezone)
            search: Search cache diagnostics
        """
        self._text = text_agent
        self._audio = audio_agent
        self._dispatcher = dispatcher
        self._history = history
        self._settings = user_settings
        self._search = search

    async def handle_text(
        self,
        conversation_id: str,
        participant_id: str,
        text: str,
        participant_name: str | None = None,
    ) -> NormalizedResponse:
        """Answer a text message using recent conversation context."""
        context = format_context(self._history.recent(conversation_id))
        self._history.append_user(
            conversation_id,
            text,
            participant_id,
            modality=Modality.TEXT,
            participant_name=participant_name,
        )

        response = await self._text.process_text(
            text,
            context=context,
            timezone_hint=self._settings.get_timezone(participant_id),
        )

        self._history.append_assistant(conversation_id, response.text)
        logger.info(
            "Text turn in %s: steps=%d, web_search=%s",
            conversation_id,
            response.step_count,
            response.used_web_search,
        )
        return response

    async def handle_multimedia(
        self,
        conversation_id: str,
        request: MultimediaRequest,
        participant_name: str | None = None,
        media_ref: str | None = None,
    ) -> NormalizedResponse:
        """Record a media turn and route it through the dispatcher."""
        participant_id = request.participant_id or "unknown"
        if request.timezone_hint is None and request.participant_id:
            request = request.model_copy(
                update={"timezone_hint": self._settings.get_timezone(request.participant_id)}
            )

        if request.audio is not None and not request.images:
            modality = Modality.AUDIO
        else:
            modality = Modality.IMAGE

        response = await self._dispatcher.dispatch(request)

        self._history.append_user(
            conversation_id,
            request.text or "",
            participant_id,
            modality=modality,
            media_ref=media_ref,
            participant_name=participant_name,
        )
        self._history.append_assistant(conversation_id, response.text)
        return response

    async def transcribe(self, audio: MediaBlob) -> str:
        """Plain transcription, no history side effects."""
        return await self._audio.transcribe_only(audio)

    def set_timezone(self, participant_id: str, timezone: str) -> bool:
        """Remember a participant's timezone for date-aware answers."""
        return self._settings.set_timezone(participant_id, timezone)

    def cache_stats(self) -> CacheStats:
        return self._search.cache_stats()

    async def clean_cache(self) -> int:
        return await self._search.clean_cache()

    def history_stats(self) -> HistoryStats:
        return self._history.stats()

    def clear_history(self, conversation_id: str) -> None:
        self._history.clear(conversation_id)

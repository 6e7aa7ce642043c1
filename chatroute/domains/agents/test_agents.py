"""
Tests for Gemini-backed agents and the web search tool.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from chatroute.adapters.gemini import GeminiResponse
from chatroute.config import AgentError, ErrorCode
from chatroute.domains.dispatch import MediaBlob
from chatroute.domains.search import SearchResult

from .audio_agent import GeminiAudioAgent
from .image_agent import GeminiImageAgent
from .prompts import (
    AUDIO_TRANSCRIBE_AND_RESPOND,
    AUDIO_TRANSCRIBE_ONLY,
    IMAGE_ANALYZE_DEFAULT,
    SYSTEM_AUDIO_PROCESSING,
    SYSTEM_MAIN,
)
from .text_agent import GeminiTextAgent
from .tools import web_search_tool


@pytest.fixture
def search() -> AsyncMock:
    service = AsyncMock()
    service.search.return_value = SearchResult(
        query="weather in Moscow",
        result_text="Sunny, 21C",
        produced_at=datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc),
    )
    return service


@pytest.fixture
def client() -> AsyncMock:
    gemini = AsyncMock()
    gemini.generate_with_tools.return_value = GeminiResponse(
        text="Here is the answer",
        model="gemini-2.5-pro",
        steps=2,
        tool_calls=["web_search"],
    )
    gemini.generate_with_media.return_value = GeminiResponse(
        text="You said hello", model="gemini-2.5-flash"
    )
    return gemini


def _image() -> MediaBlob:
    return MediaBlob(data=b"\xff\xd8\xff", mime_type="image/jpeg")


def _audio() -> MediaBlob:
    return MediaBlob(data=b"OggS", mime_type="audio/ogg")


# --- Web Search Tool Tests ---


async def test_web_search_tool_payload(search: AsyncMock) -> None:
    """Test tool handler forwards timezone and shapes the payload."""
    tool = web_search_tool(search, "Europe/Moscow")

    assert tool.name == "web_search"
    assert "query" in tool.parameters

    payload = await tool.handler(query="weather in Moscow")

    search.search.assert_awaited_once_with("weather in Moscow", "Europe/Moscow")
    assert payload == {
        "query": "weather in Moscow",
        "results": "Sunny, 21C",
        "timestamp": "2025-06-01T09:00:00+00:00",
    }


# --- Text Agent Tests ---


async def test_text_agent_builds_prompt(client: AsyncMock, search: AsyncMock) -> None:
    """Test text agent combines date context, history and question."""
    agent = GeminiTextAgent(client, search)

    response = await agent.process_text(
        "What's new?",
        context="Previous conversation context:\nUser: hi\n\n",
        timezone_hint="Asia/Tokyo",
    )

    call = client.generate_with_tools.call_args
    full_prompt = call.args[0][0]
    assert "Timezone: Asia/Tokyo" in full_prompt
    assert "User: hi\n\nCurrent user question: What's new?" in full_prompt
    assert call.kwargs["system_instruction"] == SYSTEM_MAIN
    assert call.kwargs["max_steps"] == 5
    assert call.kwargs["max_output_tokens"] == 10000
    assert call.kwargs["temperature"] == 0.7
    assert [t.name for t in call.kwargs["tools"]] == ["web_search"]

    assert response.text == "Here is the answer"
    assert response.used_web_search is True
    assert response.step_count == 2
    assert response.media_processed is False


async def test_text_agent_tool_uses_user_timezone(
    client: AsyncMock, search: AsyncMock
) -> None:
    """Test the bound tool searches in the caller's timezone."""
    agent = GeminiTextAgent(client, search)
    await agent.process_text("weather?", timezone_hint="Europe/Berlin")

    tool = client.generate_with_tools.call_args.kwargs["tools"][0]
    await tool.handler(query="weather Berlin")
    search.search.assert_awaited_once_with("weather Berlin", "Europe/Berlin")


async def test_text_agent_no_tool_use(client: AsyncMock, search: AsyncMock) -> None:
    """Test single-step generations report no web search."""
    client.generate_with_tools.return_value = GeminiResponse(text="Hi!", model="m")
    response = await GeminiTextAgent(client, search).process_text("hello")

    assert response.used_web_search is False
    assert response.step_count == 1


async def test_text_agent_wraps_errors(client: AsyncMock, search: AsyncMock) -> None:
    """Test model failures surface as AgentError."""
    client.generate_with_tools.side_effect = RuntimeError("quota")

    with pytest.raises(AgentError) as exc_info:
        await GeminiTextAgent(client, search).process_text("hello")

    assert exc_info.value.code == ErrorCode.AGENT_FAILED
    assert exc_info.value.message == "Failed to generate AI response"


# --- Image Agent Tests ---


async def test_image_agent_default_prompt(client: AsyncMock, search: AsyncMock) -> None:
    """Test missing caption uses the default analysis prompt."""
    image = _image()
    response = await GeminiImageAgent(client, search).analyze_image(image)

    call = client.generate_with_tools.call_args
    parts = call.args[0]
    assert parts[0] == IMAGE_ANALYZE_DEFAULT
    assert parts[1] == {"mime_type": "image/jpeg", "data": image.data}
    assert call.kwargs["temperature"] == 1.0
    assert "Current context:" in call.kwargs["system_instruction"]
    assert response.media_processed is True
    assert response.used_web_search is True


async def test_image_agent_custom_prompt(client: AsyncMock, search: AsyncMock) -> None:
    """Test caption replaces the default prompt."""
    await GeminiImageAgent(client, search).analyze_image(_image(), "Which city is this?")
    assert client.generate_with_tools.call_args.args[0][0] == "Which city is this?"


async def test_image_agent_region_timezone_falls_back(
    client: AsyncMock, search: AsyncMock
) -> None:
    """Test a region-only timezone hint renders UTC context instead of failing."""
    response = await GeminiImageAgent(client, search).analyze_image(_image(), timezone_hint="Europe")

    assert "Timezone: UTC" in client.generate_with_tools.call_args.kwargs["system_instruction"]
    assert response.text == "Here is the answer"


async def test_image_agent_empty_data(client: AsyncMock, search: AsyncMock) -> None:
    """Test empty image payload is rejected before calling the model."""
    empty = MediaBlob(data=b"", mime_type="image/png")

    with pytest.raises(AgentError) as exc_info:
        await GeminiImageAgent(client, search).analyze_image(empty)

    assert exc_info.value.code == ErrorCode.AGENT_MISSING_MEDIA
    client.generate_with_tools.assert_not_awaited()


async def test_image_agent_wraps_errors(client: AsyncMock, search: AsyncMock) -> None:
    """Test model failures surface as AgentError."""
    client.generate_with_tools.side_effect = ConnectionError("reset")
    with pytest.raises(AgentError, match="Failed to analyze image"):
        await GeminiImageAgent(client, search).analyze_image(_image())


# --- Audio Agent Tests ---


async def test_audio_agent_default_prompt(client: AsyncMock) -> None:
    """Test audio is sent inline with its MIME type."""
    audio = _audio()
    text = await GeminiAudioAgent(client).process_audio(audio)

    client.generate_with_media.assert_awaited_once_with(
        AUDIO_TRANSCRIBE_AND_RESPOND,
        data=audio.data,
        mime_type="audio/ogg",
        system_instruction=SYSTEM_AUDIO_PROCESSING,
    )
    assert text == "You said hello"


async def test_audio_agent_transcribe_only(client: AsyncMock) -> None:
    """Test transcription uses the verbatim prompt."""
    await GeminiAudioAgent(client).transcribe_only(_audio())
    assert client.generate_with_media.call_args.args[0] == AUDIO_TRANSCRIBE_ONLY


async def test_audio_agent_empty_data(client: AsyncMock) -> None:
    """Test empty audio payload is rejected."""
    with pytest.raises(AgentError) as exc_info:
        await GeminiAudioAgent(client).process_audio(MediaBlob(data=b"", mime_type="audio/ogg"))
    assert exc_info.value.code == ErrorCode.AGENT_MISSING_MEDIA


async def test_audio_agent_wraps_errors(client: AsyncMock) -> None:
    """Test model failures surface as AgentError."""
    client.generate_with_media.side_effect = RuntimeError("bad audio")
    with pytest.raises(AgentError, match="Failed to process audio message"):
        await GeminiAudioAgent(client).process_audio(_audio())

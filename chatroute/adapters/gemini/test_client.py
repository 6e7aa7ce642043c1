"""
Tests for Gemini Client adapter.
"""

from __future__ import annotations

from collections.abc import Generator
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from .client import GeminiAPIError, GeminiClient, RateLimitError
from .models import GeminiConfig, GeminiResponse, ToolSpec


def _usage(prompt: int = 10, completion: int = 20) -> SimpleNamespace:
    return SimpleNamespace(prompt_token_count=prompt, candidates_token_count=completion)


def _text_response(text: str) -> SimpleNamespace:
    part = SimpleNamespace(text=text, function_call=None)
    return SimpleNamespace(
        text=text,
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))],
        usage_metadata=_usage(),
    )


def _call_response(name: str, args: dict[str, Any]) -> SimpleNamespace:
    call = SimpleNamespace(name=name, args=args)
    part = SimpleNamespace(function_call=call)
    return SimpleNamespace(
        text="",
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))],
        usage_metadata=_usage(5, 1),
    )


@pytest.fixture
def mock_genai() -> Generator[MagicMock, None, None]:
    """Mock the google.generativeai module."""
    with patch("chatroute.adapters.gemini.client.genai") as mock:
        mock_model = MagicMock()
        mock_model.generate_content.return_value = SimpleNamespace(
            text="Test response",
            candidates=[],
            usage_metadata=_usage(),
        )
        mock.GenerativeModel.return_value = mock_model
        yield mock


@pytest.fixture
def client(mock_genai: MagicMock) -> GeminiClient:
    """Create a GeminiClient with mocked dependencies."""
    return GeminiClient()


# --- Model Tests ---


def test_gemini_config_defaults() -> None:
    """Test GeminiConfig default values."""
    config = GeminiConfig()
    assert config.model == "gemini-2.5-flash"
    assert config.temperature == 0.7
    assert config.top_p is None
    assert config.max_output_tokens == 10000
    assert config.rate_limit_rpm == 60


def test_gemini_config_temperature_validation() -> None:
    """Test GeminiConfig temperature must be between 0 and 2."""
    assert GeminiConfig(temperature=2.0).temperature == 2.0
    with pytest.raises(ValueError):
        GeminiConfig(temperature=-0.1)
    with pytest.raises(ValueError):
        GeminiConfig(temperature=2.1)


def test_gemini_response_used_tools() -> None:
    """Test used_tools reflects multi-step generations."""
    assert GeminiResponse(text="a", model="m").used_tools is False
    assert GeminiResponse(text="a", model="m", steps=3).used_tools is True


# --- Client Initialization Tests ---


def test_client_configures_api_key(mock_genai: MagicMock) -> None:
    """Test explicit API key is passed to the SDK."""
    GeminiClient(api_key="test-key")
    mock_genai.configure.assert_called_once_with(api_key="test-key")


def test_client_without_key_uses_adc(mock_genai: MagicMock) -> None:
    """Test no key leaves SDK auth to application default credentials."""
    GeminiClient()
    mock_genai.configure.assert_not_called()


# --- Generation Tests ---


async def test_generate(client: GeminiClient, mock_genai: MagicMock) -> None:
    """Test basic text generation."""
    response = await client.generate("Hello", system_instruction="Be brief")

    assert response.text == "Test response"
    assert response.prompt_tokens == 10
    assert response.completion_tokens == 20
    assert response.total_tokens == 30

    kwargs = mock_genai.GenerativeModel.call_args.kwargs
    assert kwargs["system_instruction"] == "Be brief"
    assert kwargs["tools"] is None


async def test_generate_grounded(client: GeminiClient, mock_genai: MagicMock) -> None:
    """Test grounding enables the search retrieval tool."""
    await client.generate("news today", max_output_tokens=6000, temperature=0.3, grounded=True)

    kwargs = mock_genai.GenerativeModel.call_args.kwargs
    assert kwargs["tools"] == "google_search_retrieval"
    assert kwargs["generation_config"]["max_output_tokens"] == 6000
    assert kwargs["generation_config"]["temperature"] == 0.3


async def test_generation_config_top_p(mock_genai: MagicMock) -> None:
    """Test top_p is sent only when configured."""
    client = GeminiClient(GeminiConfig(temperature=1.0, top_p=0.95))
    await client.generate("describe")

    config = mock_genai.GenerativeModel.call_args.kwargs["generation_config"]
    assert config["top_p"] == 0.95
    assert config["temperature"] == 1.0


async def test_generate_without_usage(client: GeminiClient, mock_genai: MagicMock) -> None:
    """Test missing usage metadata yields zero token counts."""
    mock_genai.GenerativeModel.return_value.generate_content.return_value = SimpleNamespace(
        text="ok", candidates=[], usage_metadata=None
    )
    response = await client.generate("Hello")
    assert response.total_tokens == 0


async def test_generate_with_media(client: GeminiClient, mock_genai: MagicMock) -> None:
    """Test media is sent as an inline part after the prompt."""
    await client.generate_with_media("Transcribe", data=b"OggS", mime_type="audio/ogg")

    contents = mock_genai.GenerativeModel.return_value.generate_content.call_args.args[0]
    assert contents == ["Transcribe", {"mime_type": "audio/ogg", "data": b"OggS"}]


async def test_rate_limit_error(client: GeminiClient, mock_genai: MagicMock) -> None:
    """Test quota errors map to RateLimitError without retries."""
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.side_effect = Exception("429 Resource exhausted")

    with pytest.raises(RateLimitError):
        await client.generate("Hello")
    assert model.generate_content.call_count == 1


# --- Tool Loop Tests ---


async def test_generate_with_tools_runs_tool(
    client: GeminiClient, mock_genai: MagicMock
) -> None:
    """Test a function call is executed and its result fed back."""
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.side_effect = [
        _call_response("web_search", {"query": "weather Moscow"}),
        _text_response("It is sunny in Moscow."),
    ]
    handler = AsyncMock(return_value={"results": "Sunny"})
    tool = ToolSpec(
        name="web_search",
        description="Search",
        handler=handler,
        parameters={"query": "Search query"},
    )

    response = await client.generate_with_tools(["weather?"], tools=[tool], max_steps=5)

    handler.assert_awaited_once_with(query="weather Moscow")
    assert response.text == "It is sunny in Moscow."
    assert response.steps == 2
    assert response.used_tools is True
    assert response.tool_calls == ["web_search"]
    assert response.prompt_tokens == 15
    assert model.generate_content.call_count == 2
    mock_genai.protos.FunctionResponse.assert_called_once_with(
        name="web_search", response={"results": "Sunny"}
    )


async def test_generate_with_tools_direct_answer(
    client: GeminiClient, mock_genai: MagicMock
) -> None:
    """Test a direct answer takes one step."""
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.return_value = _text_response("Hello!")
    tool = ToolSpec(name="web_search", description="Search", handler=AsyncMock())

    response = await client.generate_with_tools(["hi"], tools=[tool])

    assert response.text == "Hello!"
    assert response.steps == 1
    assert response.used_tools is False
    tool.handler.assert_not_awaited()


async def test_generate_with_tools_step_cap(
    client: GeminiClient, mock_genai: MagicMock
) -> None:
    """Test the loop stops after max_steps model rounds."""
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.return_value = _call_response("web_search", {"query": "x"})
    tool = ToolSpec(
        name="web_search",
        description="Search",
        handler=AsyncMock(return_value={"results": "r"}),
    )

    response = await client.generate_with_tools(["loop"], tools=[tool], max_steps=3)

    assert response.steps == 3
    assert model.generate_content.call_count == 3


async def test_unknown_tool_gets_error_payload(
    client: GeminiClient, mock_genai: MagicMock
) -> None:
    """Test calls to undeclared tools are answered with an error."""
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.side_effect = [
        _call_response("calculator", {"expr": "1+1"}),
        _text_response("2"),
    ]

    response = await client.generate_with_tools(["1+1?"], tools=[])

    assert response.text == "2"
    mock_genai.protos.FunctionResponse.assert_called_once_with(
        name="calculator", response={"error": "unknown tool calculator"}
    )


async def test_invalid_tool_arguments_get_error_payload(
    client: GeminiClient, mock_genai: MagicMock
) -> None:
    """Test mismatched argument names are answered with an error, not raised."""
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.side_effect = [
        _call_response("web_search", {"q": "weather"}),
        _text_response("Let me answer without searching."),
    ]

    async def run(query: str) -> dict[str, Any]:
        return {"results": query}

    tool = ToolSpec(
        name="web_search",
        description="Search",
        handler=run,
        parameters={"query": "Search query"},
    )

    response = await client.generate_with_tools(["weather?"], tools=[tool])

    assert response.text == "Let me answer without searching."
    assert response.steps == 2
    mock_genai.protos.FunctionResponse.assert_called_once_with(
        name="web_search", response={"error": "invalid arguments for web_search"}
    )


async def test_generic_error_mentioning_generate_is_not_rate_limit(
    client: GeminiClient, mock_genai: MagicMock
) -> None:
    """Test words containing "rate" do not map to RateLimitError."""
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.side_effect = Exception("Failed to generate content: bad request")

    with pytest.raises(GeminiAPIError):
        await client.generate_with_tools(["hi"], tools=[])


@pytest.mark.parametrize(
    "message",
    ["429 Too Many Requests", "Rate limit reached", "RESOURCE_EXHAUSTED", "Quota exceeded"],
)
async def test_rate_limit_markers(
    client: GeminiClient, mock_genai: MagicMock, message: str
) -> None:
    """Test quota signals map to RateLimitError."""
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.side_effect = Exception(message)

    with pytest.raises(RateLimitError):
        await client.generate_with_tools(["hi"], tools=[])


async def test_generate_respects_max_retries(mock_genai: MagicMock) -> None:
    """Test the configured attempt count bounds retries."""
    client = GeminiClient(GeminiConfig(max_retries=1))
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.side_effect = Exception("Internal failure")

    with pytest.raises(GeminiAPIError):
        await client.generate("Hello")
    assert model.generate_content.call_count == 1


async def test_generate_with_tools_api_error(
    client: GeminiClient, mock_genai: MagicMock
) -> None:
    """Test SDK failures map to GeminiAPIError."""
    model = mock_genai.GenerativeModel.return_value
    model.generate_content.side_effect = Exception("Internal failure")

    with pytest.raises(GeminiAPIError):
        await client.generate_with_tools(["hi"], tools=[])

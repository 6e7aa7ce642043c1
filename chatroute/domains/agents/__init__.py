"""
Agents Domain - Gemini-backed single-modality agents.

This domain handles:
- Text answers with a web-search tool
- Image analysis with a web-search tool
- Audio transcription and response
"""

from .audio_agent import GeminiAudioAgent
from .image_agent import GeminiImageAgent
from .text_agent import GeminiTextAgent
from .tools import web_search_tool

__all__ = [
    "GeminiTextAgent",
    "GeminiImageAgent",
    "GeminiAudioAgent",
    "web_search_tool",
]

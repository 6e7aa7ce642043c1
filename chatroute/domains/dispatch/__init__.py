"""
Dispatch Domain - Multi-modal request routing.

This domain handles:
- Choosing the audio or image agent for a request
- Normalizing agent output into one response shape
"""

from .contracts import AudioAgent, ImageAgent, MultimediaDispatcher, TextAgent
from .dispatcher import ModalityDispatcher
from .models import MediaBlob, MultimediaRequest, NormalizedResponse

__all__ = [
    # Contracts
    "TextAgent",
    "AudioAgent",
    "ImageAgent",
    "MultimediaDispatcher",
    # Models
    "MediaBlob",
    "MultimediaRequest",
    "NormalizedResponse",
    # Implementations
    "ModalityDispatcher",
]

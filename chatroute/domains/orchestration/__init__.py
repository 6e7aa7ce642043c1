"""
Orchestration Domain - Turn handling and service wiring.

This domain handles:
- Per-turn coordination of history, agents, and dispatch
- Operator diagnostics passthrough
- Building the service graph from settings
"""

from .factory import build_assistant
from .service import AssistantService

__all__ = [
    "AssistantService",
    "build_assistant",
]

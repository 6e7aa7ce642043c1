"""
Domains - Business logic layer.

Each domain is self-contained with:
- contracts.py: Interfaces (Protocol classes)
- models.py: Pydantic data models
- Implementation files
- test_*.py modules beside the code
"""

__all__ = [
    "search",
    "dispatch",
    "conversation",
    "agents",
    "orchestration",
]

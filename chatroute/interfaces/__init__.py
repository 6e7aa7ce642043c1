"""
Interfaces - Operator-facing entry points.

- cli: Command-line interface (search, classify, interactive chat)
"""

__all__ = ["cli"]

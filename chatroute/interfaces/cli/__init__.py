"""
CLI Interface - Command-line tools for ChatRoute.

Provides commands for:
- One-off web searches
- Tier classification
- Interactive chat with diagnostics
"""

from .main import app, main

__all__ = ["app", "main"]

"""
ChatRoute - Search-routing, response-caching and multi-modal dispatch core
for an AI chat-bot backend.

Example:
    >>> from chatroute.domains.search import SearchRouter
    >>> router = SearchRouter(basic_provider, advanced_provider)
    >>> result = await router.search("weather in Moscow today", "Europe/Moscow")
"""

__version__ = "1.0.0"
__all__ = ["__version__"]

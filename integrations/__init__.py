"""Integration modules package."""
from .web_search import WebSearchAPI

__all__ = [
    "WebSearchAPI",
]

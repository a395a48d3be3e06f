"""LLM-backed writing agents."""
from .base import BaseAgent
from .content_writer import ContentWriter
from .research_agent import ResearchAgent

__all__ = ["BaseAgent", "ContentWriter", "ResearchAgent"]

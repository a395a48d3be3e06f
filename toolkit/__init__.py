"""Productivity toolkit: markdown-backed LLM agents for capture, research, writing and review."""

from .agents.content_writer import ContentWriter
from .agents.research_agent import ResearchAgent
from .capture.processor import CaptureProcessor
from .config import ToolkitConfig, load_config
from .llm_client import LLMClient, LLMError
from .review.weekly_generator import WeeklyReviewGenerator

__all__ = [
    "CaptureProcessor",
    "ContentWriter",
    "LLMClient",
    "LLMError",
    "ResearchAgent",
    "ToolkitConfig",
    "WeeklyReviewGenerator",
    "load_config",
]

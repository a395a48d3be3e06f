"""Base agent class with LLM and tracker-file helpers."""
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from ..config import ToolkitConfig
from ..llm_client import LLMClient

logger = logging.getLogger(__name__)


def today_iso(today: Optional[date] = None) -> str:
    """Today's date as YYYY-MM-DD."""
    return (today or date.today()).isoformat()


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


class BaseAgent:
    """Base class for the toolkit agents.

    Holds the injected configuration and LLM client. Subclasses set
    ``temperature`` to their preferred sampling temperature.
    """

    temperature: float = 0.7

    def __init__(
        self,
        config: Optional[ToolkitConfig] = None,
        llm: Optional[LLMClient] = None,
    ):
        self.config = config or ToolkitConfig()
        self.llm = llm or LLMClient(self.config.llm)

    @property
    def base_dir(self) -> Path:
        return self.config.base_dir

    def path_for(self, filename: str) -> Path:
        return self.config.path_for(filename)

    def _call_llm(self, prompt: str, temperature: Optional[float] = None) -> str:
        """Send ``prompt`` to the LLM at this agent's temperature."""
        temp = self.temperature if temperature is None else temperature
        logger.debug(f"{type(self).__name__} prompt: {len(prompt)} chars, temperature={temp}")
        return self.llm.complete(prompt, temperature=temp)

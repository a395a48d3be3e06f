from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Union

import pytest

from toolkit.config import LLMSettings, SearchSettings, ToolkitConfig


_ENV_VARS = (
    "LLM_PROVIDER",
    "LLM_MODEL",
    "LLM_API_URL",
    "LLM_API_KEY",
    "LLM_TIMEOUT",
    "BRAVE_API_KEY",
    "TOOLKIT_BASE_DIR",
    "TOOLKIT_CONFIG",
)


class FakeLLM:
    """Stands in for LLMClient; replies from a list, a callable, or a constant."""

    def __init__(self, replies: Union[str, list, Callable[[str], str]] = ""):
        self.replies = replies
        self.calls: list[tuple[str, float]] = []

    def complete(self, prompt: str, temperature: float = 0.7) -> str:
        self.calls.append((prompt, temperature))
        if callable(self.replies):
            return self.replies(prompt)
        if isinstance(self.replies, list):
            reply = self.replies.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return reply
        return self.replies

    @property
    def prompts(self) -> list[str]:
        return [prompt for prompt, _ in self.calls]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch):
    """Keep logs and config lookups inside the test's temp directory."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TOOLKIT_STATE_DIR", str(tmp_path / "state"))


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    path = tmp_path / "notes"
    path.mkdir()
    return path


@pytest.fixture
def make_config(workspace: Path):
    def _make(base_dir: Optional[Path] = None, **search) -> ToolkitConfig:
        return ToolkitConfig(
            base_dir=base_dir or workspace,
            llm=LLMSettings(),
            search=SearchSettings(**search),
        )

    return _make


@pytest.fixture
def fake_llm_factory():
    return FakeLLM

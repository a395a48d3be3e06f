"""Configuration management for the productivity toolkit.

Configuration is loaded once per process (by the CLI) and passed into every
agent. A missing or unreadable config file is not an error: the typed
defaults below are used instead.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .state_paths import resolve_base_dir, resolve_config_path

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "ollama"
DEFAULT_MODEL = "llama3:8b"
DEFAULT_BASE_URL = "http://localhost:11434"
# None means no request timeout
DEFAULT_TIMEOUT: Optional[float] = None
DEFAULT_MAX_RESULTS = 5


def _parse_timeout(value: Any, default: Optional[float]) -> Optional[float]:
    """Seconds as a float; None, "none" or a non-positive number disable the timeout."""
    if value is None or value == "":
        return default
    if isinstance(value, str) and value.strip().lower() in ("none", "null", "off"):
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring invalid LLM timeout {value!r}")
        return default
    return seconds if seconds > 0 else None


def _parse_int(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class LLMSettings:
    """Where and how to reach the completion endpoint."""

    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    api_key: Optional[str] = None
    timeout: Optional[float] = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class SearchSettings:
    """Web search provider settings."""

    api_key: Optional[str] = None
    max_results: int = DEFAULT_MAX_RESULTS


@dataclass(frozen=True)
class ToolkitConfig:
    """Process-wide configuration injected into every agent."""

    base_dir: Path = field(default_factory=Path.cwd)
    llm: LLMSettings = field(default_factory=LLMSettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    source: str = "defaults"

    def path_for(self, filename: str) -> Path:
        """Absolute path of a tracker file under the base directory."""
        return self.base_dir / filename


def _read_config_file(path: Optional[Path]) -> dict[str, Any]:
    if path is None:
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        logger.debug(f"Config file {path} unreadable ({exc}); using defaults")
        return {}
    if not isinstance(data, dict):
        logger.debug(f"Config file {path} is not a mapping; using defaults")
        return {}
    return data


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


def load_config(
    config_path: Optional[Path | str] = None,
    base_dir: Optional[Path | str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ToolkitConfig:
    """
    Resolve the effective toolkit configuration.

    Precedence (highest first): environment variables, config file,
    built-in defaults.

    Args:
        config_path: Explicit config file (defaults to TOOLKIT_CONFIG or
            <base_dir>/config/default.yaml)
        base_dir: Directory holding the tracker files
        env: Environment mapping (defaults to os.environ)

    Returns:
        ToolkitConfig instance
    """
    if env is None:
        env = os.environ

    root = resolve_base_dir(base_dir)
    path = resolve_config_path(config_path, base_dir=root)
    data = _read_config_file(path)
    llm_data = _section(data, "llm")
    search_data = _section(data, "search")

    base_url = (
        env.get("LLM_API_URL")
        or llm_data.get("base_url")
        or llm_data.get("baseUrl")
        or DEFAULT_BASE_URL
    )

    llm = LLMSettings(
        provider=str(
            env.get("LLM_PROVIDER") or llm_data.get("provider") or DEFAULT_PROVIDER
        ).strip().lower(),
        model=str(env.get("LLM_MODEL") or llm_data.get("model") or DEFAULT_MODEL),
        base_url=str(base_url).rstrip("/"),
        api_key=env.get("LLM_API_KEY") or llm_data.get("api_key"),
        timeout=_parse_timeout(
            env.get("LLM_TIMEOUT"),
            _parse_timeout(llm_data.get("timeout"), DEFAULT_TIMEOUT),
        ),
    )

    search = SearchSettings(
        api_key=env.get("BRAVE_API_KEY") or None,
        max_results=_parse_int(
            search_data.get("max_results", search_data.get("maxResults")),
            DEFAULT_MAX_RESULTS,
        ),
    )

    return ToolkitConfig(
        base_dir=root,
        llm=llm,
        search=search,
        source=str(path) if data else "defaults",
    )

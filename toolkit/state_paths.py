"""Shared helpers for resolving toolkit paths.

Tracker markdown files live under the base directory (the user's notes
folder); logs live under the state directory.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

DEFAULT_STATE_DIR = Path.home() / ".local" / "state" / "toolkit"

CONFIG_ENV = "TOOLKIT_CONFIG"
CONFIG_CANDIDATES = ("config/default.yaml", "config/default.json")


def _expand(value: str | Path) -> Path:
    """Expand both $VAR and ~ in a path."""
    return Path(os.path.expandvars(str(value))).expanduser()


def resolve_state_dir(base_dir: Optional[Path] = None) -> Path:
    """Resolve the directory used for logs and other runtime state."""
    if base_dir is not None:
        return _expand(base_dir)
    env_dir = os.getenv("TOOLKIT_STATE_DIR")
    if env_dir:
        return _expand(env_dir)
    return DEFAULT_STATE_DIR


def resolve_base_dir(base_dir: Optional[Path | str] = None) -> Path:
    """Resolve the directory holding the tracker markdown files.

    Precedence: explicit argument > TOOLKIT_BASE_DIR > current directory.
    """
    if base_dir is not None:
        return _expand(base_dir)
    env_dir = os.getenv("TOOLKIT_BASE_DIR")
    if env_dir:
        return _expand(env_dir)
    return Path.cwd()


def resolve_config_path(
    config_path: Optional[Path | str] = None,
    base_dir: Optional[Path] = None,
) -> Optional[Path]:
    """Locate the config file, or None when there is nothing to read."""
    if config_path is not None:
        return _expand(config_path)
    env_path = os.getenv(CONFIG_ENV)
    if env_path:
        return _expand(env_path)
    root = resolve_base_dir(base_dir)
    for candidate in CONFIG_CANDIDATES:
        path = root / candidate
        if path.exists():
            return path
    return None

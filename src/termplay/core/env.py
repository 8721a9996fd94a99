"""Helpers for environment overrides shared across the app."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "termplay" / "settings.yaml"


def resolve_config_path(explicit: Optional[Path] = None) -> Path:
    """Pick config path: explicit argument, then environment, then the default."""

    if explicit is not None:
        return Path(explicit)
    env_path = os.environ.get("TERMPLAY_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    env_dir = os.environ.get("TERMPLAY_CONFIG_DIR")
    if env_dir:
        return Path(env_dir) / "settings.yaml"
    return DEFAULT_CONFIG_PATH


def resolve_log_dir(configured: Optional[str] = None) -> Path:
    env_dir = os.environ.get("TERMPLAY_LOG_DIR")
    if env_dir:
        return Path(env_dir)
    if configured:
        return Path(configured).expanduser()
    return Path(tempfile.gettempdir()) / "termplay_logs"

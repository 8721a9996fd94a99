"""Application configuration management module."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import DEFAULT_CONFIG
from .merge import merge_known_sections
from termplay.core.env import resolve_config_path

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SettingsManager:
    """YAML configuration layered over built-in defaults."""

    config_path: Optional[Path] = None

    def __post_init__(self) -> None:
        self.config_path = resolve_config_path(self.config_path)
        self._data: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        if self.config_path.exists():
            try:
                with self.config_path.open("r", encoding="utf-8") as file:
                    user_config = yaml.safe_load(file) or {}
            except (OSError, yaml.YAMLError) as exc:
                logger.warning("Ignoring unreadable config %s: %s", self.config_path, exc)
                user_config = {}
            if not isinstance(user_config, dict):
                user_config = {}
            self._data = merge_known_sections(DEFAULT_CONFIG, user_config)
        else:
            self._data = copy.deepcopy(DEFAULT_CONFIG)

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._data.get(name, {})
        return section if isinstance(section, dict) else {}

    def _positive_float(self, section: str, key: str) -> float:
        value = self._section(section).get(key, DEFAULT_CONFIG[section][key])
        try:
            number = float(value)
        except (TypeError, ValueError):
            return DEFAULT_CONFIG[section][key]
        return number if number > 0 else DEFAULT_CONFIG[section][key]

    def get_buffer_seconds(self) -> float:
        return self._positive_float("playback", "buffer_seconds")

    def get_refresh_interval(self) -> float:
        return self._positive_float("playback", "refresh_interval_seconds")

    def get_ffmpeg_fallback(self) -> bool:
        decoding = self._section("decoding")
        return bool(decoding.get("ffmpeg_fallback", DEFAULT_CONFIG["decoding"]["ffmpeg_fallback"]))

    def get_filename_fallback(self) -> bool:
        display = self._section("display")
        return bool(display.get("filename_fallback", DEFAULT_CONFIG["display"]["filename_fallback"]))

    def get_clear_screen(self) -> bool:
        display = self._section("display")
        return bool(display.get("clear_screen", DEFAULT_CONFIG["display"]["clear_screen"]))

    def get_log_level(self) -> str:
        diagnostics = self._section("diagnostics")
        level = str(diagnostics.get("log_level", DEFAULT_CONFIG["diagnostics"]["log_level"])).upper()
        return level if level in _LOG_LEVELS else DEFAULT_CONFIG["diagnostics"]["log_level"]

    def get_log_directory(self) -> Optional[str]:
        value = self._section("logging").get("directory")
        if value in (None, "", False):
            return None
        return str(value)

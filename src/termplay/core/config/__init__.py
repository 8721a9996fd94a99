"""Application configuration management package."""

from __future__ import annotations

from .defaults import DEFAULT_CONFIG
from .settings import SettingsManager

__all__ = [
    "DEFAULT_CONFIG",
    "SettingsManager",
]

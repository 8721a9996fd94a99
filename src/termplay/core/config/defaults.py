"""Default configuration values."""

from __future__ import annotations

from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "playback": {
        "buffer_seconds": 0.1,
        "refresh_interval_seconds": 1.0,
    },
    "decoding": {
        "ffmpeg_fallback": True,
    },
    "display": {
        "filename_fallback": True,
        "clear_screen": True,
    },
    "diagnostics": {
        "log_level": "WARNING",
    },
    "logging": {
        "directory": None,
    },
}

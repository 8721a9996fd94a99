"""Helpers for reading track metadata shown in the status display."""

from __future__ import annotations

from termplay.core.media_metadata.extract import estimate_bitrate_kbps, read_metadata
from termplay.core.media_metadata.models import TrackMetadata

__all__ = [
    "TrackMetadata",
    "estimate_bitrate_kbps",
    "read_metadata",
]

"""Shared data structures for media metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class TrackMetadata:
    title: str
    label: str
    artist: Optional[str] = None
    album: Optional[str] = None
    duration_seconds: float = 0.0
    bitrate_kbps: Optional[int] = None

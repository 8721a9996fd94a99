"""Terminal status display."""

from __future__ import annotations

import sys
from typing import Optional, TextIO, Tuple

from termplay.audio.types import AudioFormat
from termplay.core.media_metadata import TrackMetadata
from termplay.core.session import PlaybackSession

CLEAR_SCREEN = "\033[H\033[2J"
HELP_LINE = "1: Pause/Resume | 2: Loop"


def split_elapsed(total_seconds: Optional[int]) -> Tuple[int, int, int]:
    """Return (hours, minutes, seconds); an unknown elapsed time reads as zero."""
    if not total_seconds or total_seconds < 0:
        return 0, 0, 0
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return hours, minutes, seconds


def format_elapsed(total_seconds: Optional[int]) -> str:
    hours, minutes, seconds = split_elapsed(total_seconds)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_sample_rate(sample_rate: int) -> str:
    khz = sample_rate / 1000
    if khz == int(khz):
        return f"{khz:.0f}KHz"
    return f"{khz:.1f}KHz"


def format_line(metadata: TrackMetadata, audio_format: AudioFormat) -> str:
    if metadata.bitrate_kbps is not None:
        return f"{metadata.label} {metadata.bitrate_kbps:02d}kbps"
    return f"{metadata.label} {format_sample_rate(audio_format.sample_rate)}/{audio_format.bit_depth:02d}bit"


def status_indicator(paused: bool, loop: bool) -> str:
    parts = []
    if paused:
        parts.append("PAUSED")
    if loop:
        parts.append("LOOP")
    if not parts:
        return ""
    return "| " + " | ".join(parts) + " |"


def render_status(session: PlaybackSession, metadata: TrackMetadata) -> str:
    lines = [metadata.title]
    details = " • ".join(value for value in (metadata.artist, metadata.album) if value)
    if details:
        lines.append(details)
    lines.append(format_line(metadata, session.format))
    lines.append("")
    lines.append(f"Time: {format_elapsed(session.elapsed_seconds())}")
    lines.append(HELP_LINE)
    lines.append("")
    lines.append(status_indicator(session.paused, session.loop))
    return "\n".join(lines)


class StatusRenderer:
    """Redraws the whole status block on every call."""

    def __init__(
        self,
        metadata: TrackMetadata,
        out: Optional[TextIO] = None,
        *,
        clear_screen: bool = True,
    ) -> None:
        self.metadata = metadata
        self._out = out if out is not None else sys.stdout
        self._clear_screen = clear_screen

    def __call__(self, session: PlaybackSession) -> None:
        self.render(session)

    def render(self, session: PlaybackSession) -> None:
        text = render_status(session, self.metadata)
        if self._clear_screen:
            text = CLEAR_SCREEN + text
        self._out.write(text + "\n")
        self._out.flush()

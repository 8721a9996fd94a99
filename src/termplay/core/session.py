"""Per-attempt playback state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from termplay.audio.types import AudioFormat, Stream

logger = logging.getLogger(__name__)


class PlaybackState(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass
class PlaybackSession:
    """One playback attempt of `source_path`.

    The session owns `stream` exclusively and closes it exactly once through
    `close()`. `paused` is flipped only by the driver while it holds the sink
    lock; `loop` survives into the next attempt.
    """

    source_path: Path
    stream: Stream
    format: AudioFormat
    size_bytes: int = 0
    paused: bool = False
    loop: bool = False
    completed: bool = False
    _closed: bool = field(default=False, init=False, repr=False)

    @property
    def file_name(self) -> str:
        return self.source_path.name

    @property
    def file_extension(self) -> str:
        return self.source_path.suffix

    @property
    def state(self) -> PlaybackState:
        if self.completed:
            return PlaybackState.COMPLETED
        if self.paused:
            return PlaybackState.PAUSED
        return PlaybackState.PLAYING

    @property
    def position(self) -> int:
        return self.stream.position

    def elapsed_seconds(self) -> Optional[int]:
        """Whole seconds played, or None when the sample rate is unusable."""
        if self.format.sample_rate <= 0:
            return None
        return max(0, self.stream.position) // self.format.sample_rate

    def mark_completed(self) -> None:
        self.completed = True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.stream.close()
        logger.debug("Session for %s closed", self.file_name)

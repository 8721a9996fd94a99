"""Audio type definitions shared by the decoder, the sink and the session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol


class FileKind(Enum):
    MP3 = ".mp3"
    FLAC = ".flac"
    OGG = ".ogg"
    WAV = ".wav"

    @classmethod
    def from_extension(cls, extension: str) -> Optional["FileKind"]:
        # exact match: ".MP3" is not ".mp3"
        for kind in cls:
            if kind.value == extension:
                return kind
        return None

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class AudioFormat:
    sample_rate: int
    bit_depth: int
    channels: int


class Stream(Protocol):
    """Exclusively owned cursor over decoded samples."""

    @property
    def kind(self) -> FileKind: ...

    @property
    def position(self) -> int: ...

    @property
    def size_bytes(self) -> int: ...

    @property
    def closed(self) -> bool: ...

    def read(self, frames: int): ...

    def close(self) -> None: ...

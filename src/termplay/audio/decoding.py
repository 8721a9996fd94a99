"""Extension based decoder dispatch.

`decode()` maps the exact file extension onto one of four decoders and returns
an exclusively owned stream together with its immutable format.  Nothing is
sniffed from file contents: an unknown extension is rejected before decoding.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from threading import Lock
from typing import BinaryIO, Callable, Dict, Optional, Tuple

import soundfile as sf

from termplay.audio.transcoding import ffmpeg_available, transcode_source_to_wav
from termplay.audio.types import AudioFormat, FileKind
from termplay.errors import DecodeError, FileOpenError, UnsupportedFormatError

logger = logging.getLogger(__name__)


_CONTAINERS: Dict[FileKind, frozenset[str]] = {
    FileKind.MP3: frozenset({"MP3"}),
    FileKind.FLAC: frozenset({"FLAC"}),
    FileKind.OGG: frozenset({"OGG"}),
    FileKind.WAV: frozenset({"WAV", "WAVEX"}),
}

_SUBTYPE_BITS = {
    "PCM_S8": 8,
    "PCM_U8": 8,
    "PCM_16": 16,
    "PCM_24": 24,
    "PCM_32": 32,
    "FLOAT": 32,
    "DOUBLE": 64,
}

# compressed subtypes (VORBIS, OPUS, MPEG_LAYER_III, ...) decode to 16 bit
_DEFAULT_BITS = 16


class SoundFileStream:
    """Sequential float32 reader over a libsndfile handle.

    `position` counts frames handed out by `read()` and never decreases.
    `close()` may be called from several exit paths; resources are released
    only on the first call.
    """

    def __init__(
        self,
        sound_file,
        fileobj: BinaryIO,
        kind: FileKind,
        *,
        size_bytes: int,
        transcoded_path: Optional[Path] = None,
    ) -> None:
        self._sound_file = sound_file
        self._fileobj = fileobj
        self._kind = kind
        self._size_bytes = size_bytes
        self._transcoded_path = transcoded_path
        self._position = 0
        self._closed = False
        self._close_lock = Lock()

    @property
    def kind(self) -> FileKind:
        return self._kind

    @property
    def position(self) -> int:
        return self._position

    @property
    def size_bytes(self) -> int:
        return self._size_bytes

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def sound_file(self):
        return self._sound_file

    def read(self, frames: int):
        data = self._sound_file.read(frames, dtype="float32", always_2d=True)
        self._position += len(data)
        return data

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        try:
            self._sound_file.close()
        finally:
            self._fileobj.close()
            if self._transcoded_path is not None:
                self._transcoded_path.unlink(missing_ok=True)
                self._transcoded_path = None
        logger.debug("Stream closed at frame %d", self._position)


def _bit_depth(subtype: str) -> int:
    return _SUBTYPE_BITS.get(subtype, _DEFAULT_BITS)


def _format_of(sound_file) -> AudioFormat:
    return AudioFormat(
        sample_rate=int(sound_file.samplerate),
        bit_depth=_bit_depth(str(sound_file.subtype)),
        channels=int(sound_file.channels),
    )


def _open_sound_file(source, kind: FileKind, name: str):
    try:
        sound_file = sf.SoundFile(source, mode="r")
    except RuntimeError as exc:
        raise DecodeError(f"Cannot decode {name}: {exc}") from exc
    if sound_file.format not in _CONTAINERS[kind]:
        found = sound_file.format
        sound_file.close()
        raise DecodeError(f"{name} is not a valid {kind.label} file (found {found})")
    return sound_file


def _decode_container(path: Path, fileobj: BinaryIO, kind: FileKind, **_options) -> SoundFileStream:
    size_bytes = os.fstat(fileobj.fileno()).st_size
    sound_file = _open_sound_file(fileobj, kind, path.name)
    return SoundFileStream(sound_file, fileobj, kind, size_bytes=size_bytes)


def _decode_mp3(path: Path, fileobj: BinaryIO, kind: FileKind, *, ffmpeg_fallback: bool) -> SoundFileStream:
    size_bytes = os.fstat(fileobj.fileno()).st_size
    try:
        sound_file = _open_sound_file(fileobj, kind, path.name)
    except DecodeError:
        if not ffmpeg_fallback or not ffmpeg_available():
            raise
        logger.info("libsndfile rejected %s, transcoding with FFmpeg", path.name)
    else:
        return SoundFileStream(sound_file, fileobj, kind, size_bytes=size_bytes)

    wav_path = transcode_source_to_wav(path)
    try:
        sound_file = sf.SoundFile(wav_path, mode="r")
    except RuntimeError as exc:
        wav_path.unlink(missing_ok=True)
        raise DecodeError(f"Cannot read transcoded copy of {path.name}") from exc
    return SoundFileStream(sound_file, fileobj, kind, size_bytes=size_bytes, transcoded_path=wav_path)


Decoder = Callable[..., SoundFileStream]

DECODERS: Dict[FileKind, Decoder] = {
    FileKind.MP3: _decode_mp3,
    FileKind.FLAC: _decode_container,
    FileKind.OGG: _decode_container,
    FileKind.WAV: _decode_container,
}


def decode(path: Path | str, *, ffmpeg_fallback: bool = True) -> Tuple[SoundFileStream, AudioFormat]:
    """Open *path* and decode it according to its extension.

    Raises FileOpenError, UnsupportedFormatError or DecodeError. On error every
    handle opened here is closed again.
    """
    path = Path(path)
    try:
        fileobj = path.open("rb")
    except OSError as exc:
        raise FileOpenError(f"Cannot open {path}: {exc.strerror or exc}") from exc

    kind = FileKind.from_extension(path.suffix)
    if kind is None:
        fileobj.close()
        raise UnsupportedFormatError(f"Unsupported file type: {path.suffix or path.name}")

    try:
        stream = DECODERS[kind](path, fileobj, kind, ffmpeg_fallback=ffmpeg_fallback)
    except BaseException:
        fileobj.close()
        raise
    audio_format = _format_of(stream.sound_file)
    logger.info(
        "Decoded %s as %s: %d Hz, %d bit, %d channel(s)",
        path.name,
        kind.label,
        audio_format.sample_rate,
        audio_format.bit_depth,
        audio_format.channels,
    )
    return stream, audio_format

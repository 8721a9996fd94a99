"""Metadata extraction helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from mutagen import File as MutagenFile
from mutagen import MutagenError

from termplay.audio.types import FileKind
from termplay.core.media_metadata.models import TrackMetadata
from termplay.errors import MetadataReadError


logger = logging.getLogger(__name__)

_TITLE_KEYS = ("TIT2", "title", "TITLE")
_ARTIST_KEYS = ("TPE1", "artist", "ARTIST")
_ALBUM_KEYS = ("TALB", "album", "ALBUM")


def _tag_text(tag: Any) -> Optional[str]:
    # mutagen returns ID3 frames with .text, or plain lists for Vorbis comments
    if hasattr(tag, "text"):
        text = tag.text
    else:
        text = tag
    if isinstance(text, (list, tuple)):
        text = text[0] if text else None
    if text is None:
        return None
    value = str(text).strip()
    return value or None


def _first_tag(tags: Any, keys: tuple[str, ...]) -> Optional[str]:
    if not tags:
        return None
    for key in keys:
        try:
            tag = tags.get(key)
        except (KeyError, ValueError):
            continue
        if tag:
            value = _tag_text(tag)
            if value:
                return value
    return None


def estimate_bitrate_kbps(size_bytes: int, duration_seconds: float) -> Optional[int]:
    """Average bitrate from file size and duration, or None when unknown."""
    if size_bytes <= 0 or duration_seconds <= 0:
        return None
    return int(size_bytes * 8 / duration_seconds / 1000)


def read_metadata(
    path: Path,
    kind: FileKind,
    size_bytes: int,
    *,
    filename_fallback: bool = True,
) -> TrackMetadata:
    """Read title, artist, album and bitrate for the status display.

    An empty title is replaced by the file name when *filename_fallback* is set,
    for every format alike.
    """
    try:
        audio = MutagenFile(path)
    except (MutagenError, OSError) as exc:
        raise MetadataReadError(f"Cannot read metadata of {path.name}: {exc}") from exc
    if audio is None:
        raise MetadataReadError(f"Cannot read metadata of {path.name}: unrecognised file")

    tags = getattr(audio, "tags", None)
    title = _first_tag(tags, _TITLE_KEYS) or ""
    if not title and filename_fallback:
        title = path.name
    artist = _first_tag(tags, _ARTIST_KEYS)
    album = _first_tag(tags, _ALBUM_KEYS)

    info = getattr(audio, "info", None)
    duration = float(getattr(info, "length", 0.0) or 0.0)

    bitrate: Optional[int] = None
    if kind is FileKind.MP3:
        bitrate = estimate_bitrate_kbps(size_bytes, duration)
        if bitrate is None:
            reported = getattr(info, "bitrate", 0) or 0
            bitrate = int(reported) // 1000 if reported else None

    logger.debug("Metadata for %s: title=%r artist=%r album=%r", path.name, title, artist, album)
    return TrackMetadata(
        title=title,
        label=kind.label,
        artist=artist,
        album=album,
        duration_seconds=duration,
        bitrate_kbps=bitrate,
    )

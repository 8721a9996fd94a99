"""Helpers for transcoding MP3 files that libsndfile cannot read."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from pathlib import Path

from termplay.errors import DecodeError


def ffmpeg_available() -> bool:
    return shutil.which("ffmpeg") is not None


def transcode_source_to_wav(source: Path) -> Path:
    """Decode *source* with FFmpeg into a temporary 16-bit WAV file.

    The caller owns the returned file and must unlink it.
    """
    ffmpeg = shutil.which("ffmpeg")
    if not ffmpeg:
        raise DecodeError(f"FFmpeg is required to decode {source.name}")
    fd, temp_name = tempfile.mkstemp(prefix="termplay-", suffix=".wav")
    os.close(fd)
    target = Path(temp_name)
    cmd = [
        ffmpeg,
        "-y",
        "-i",
        str(source),
        "-vn",
        "-acodec",
        "pcm_s16le",
        str(target),
    ]
    try:
        subprocess.run(cmd, check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except FileNotFoundError as exc:  # pragma: no cover - depends on environment
        target.unlink(missing_ok=True)
        raise DecodeError("FFmpeg was not found in PATH") from exc
    except subprocess.CalledProcessError as exc:
        target.unlink(missing_ok=True)
        raise DecodeError(f"FFmpeg could not decode {source.name}") from exc
    return target

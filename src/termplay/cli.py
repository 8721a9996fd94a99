"""Command line parsing."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from termplay import __version__
from termplay.errors import ArgumentError

USAGE = "termplay [--config PATH] [--log-level LEVEL] FILE"


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # noqa: D401
        raise ArgumentError(f"{message} (usage: {USAGE})")


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="termplay",
        usage=USAGE,
        description="Play one MP3, FLAC, Ogg Vorbis or WAV file. Type 1 to pause/resume, 2 to toggle loop.",
    )
    parser.add_argument("file", type=Path, nargs="*", help="audio file to play")
    parser.add_argument("--config", type=Path, default=None, help="settings file (YAML)")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        type=str.upper,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse *argv*; exactly one file path is required."""
    args = build_parser().parse_args(argv)
    if len(args.file) != 1:
        raise ArgumentError(f"expected exactly one file, got {len(args.file)} (usage: {USAGE})")
    args.file = args.file[0]
    return args

"""Fatal error kinds raised by the player.

Every error here ends the process: `termplay.app.run` maps them to a message
on stderr and a nonzero exit status.
"""

from __future__ import annotations


class TermplayError(Exception):
    exit_code = 1


class ArgumentError(TermplayError):
    exit_code = 2


class FileOpenError(TermplayError):
    pass


class UnsupportedFormatError(TermplayError):
    pass


class DecodeError(TermplayError):
    pass


class MetadataReadError(TermplayError):
    pass


class AudioDeviceError(TermplayError):
    pass


class ClosedCompletionSignal(TermplayError):
    """Playback worker ended without reporting the end of the stream."""

from pathlib import Path

from termplay.audio.types import AudioFormat, FileKind
from termplay.core.completion import CompletionSignal
from termplay.core.session import PlaybackSession, PlaybackState


class DummyStream:
    def __init__(self) -> None:
        self.position = 0
        self.size_bytes = 1234
        self.close_calls = 0

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def read(self, frames: int):  # pragma: no cover
        return []

    def close(self) -> None:
        self.close_calls += 1


def _session() -> PlaybackSession:
    return PlaybackSession(
        source_path=Path("/music/Track.ogg"),
        stream=DummyStream(),
        format=AudioFormat(sample_rate=0, bit_depth=16, channels=2),
    )


def test_session_state_follows_flags() -> None:
    session = _session()
    assert session.state is PlaybackState.PLAYING
    session.paused = True
    assert session.state is PlaybackState.PAUSED
    session.paused = False
    session.loop = True
    assert session.state is PlaybackState.PLAYING
    session.mark_completed()
    assert session.state is PlaybackState.COMPLETED


def test_session_identity_and_zero_rate_guard() -> None:
    session = _session()
    assert session.file_name == "Track.ogg"
    assert session.file_extension == ".ogg"
    assert session.elapsed_seconds() is None


def test_session_closes_stream_once() -> None:
    session = _session()
    session.close()
    session.close()
    assert session.stream.close_calls == 1


def test_file_kind_lookup_is_case_sensitive() -> None:
    assert FileKind.from_extension(".mp3") is FileKind.MP3
    assert FileKind.from_extension(".wav") is FileKind.WAV
    assert FileKind.from_extension(".MP3") is None
    assert FileKind.from_extension(".aiff") is None
    assert FileKind.from_extension("") is None


def test_completion_signal_delivers_once() -> None:
    signal = CompletionSignal()
    assert signal.peek() is None
    signal.deliver()
    signal.close()
    signal.deliver()
    assert signal.peek() is True


def test_completion_signal_closed_without_value() -> None:
    signal = CompletionSignal()
    signal.close()
    signal.deliver()
    assert signal.peek() is False

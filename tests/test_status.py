import io
from pathlib import Path

from termplay.audio.types import AudioFormat
from termplay.core.media_metadata import TrackMetadata
from termplay.core.session import PlaybackSession
from termplay.ui.status import (
    CLEAR_SCREEN,
    HELP_LINE,
    StatusRenderer,
    format_elapsed,
    format_line,
    format_sample_rate,
    render_status,
    split_elapsed,
    status_indicator,
)


class DummyStream:
    def __init__(self, position: int = 0) -> None:
        self.position = position
        self.size_bytes = 0
        self.closed = False

    def read(self, frames: int):  # pragma: no cover
        return []

    def close(self) -> None:
        self.closed = True


def _session(position: int = 0, sample_rate: int = 44100, **kwargs) -> PlaybackSession:
    return PlaybackSession(
        source_path=Path("/music/song.flac"),
        stream=DummyStream(position),
        format=AudioFormat(sample_rate=sample_rate, bit_depth=16, channels=2),
        **kwargs,
    )


def test_elapsed_time_uses_floor_division() -> None:
    assert _session(220_500).elapsed_seconds() == 5
    assert _session(220_499).elapsed_seconds() == 4
    assert format_elapsed(_session(220_500).elapsed_seconds()) == "00:00:05"
    assert split_elapsed(_session(44_100 * 3725 + 44_099).elapsed_seconds()) == (1, 2, 5)


def test_elapsed_time_with_zero_sample_rate() -> None:
    session = _session(1_000, sample_rate=0)
    assert session.elapsed_seconds() is None
    assert format_elapsed(session.elapsed_seconds()) == "00:00:00"
    assert "Time: 00:00:00" in render_status(session, TrackMetadata(title="t", label="WAV"))


def test_sample_rate_and_format_lines() -> None:
    assert format_sample_rate(44_100) == "44.1KHz"
    assert format_sample_rate(48_000) == "48KHz"

    flac = TrackMetadata(title="t", label="FLAC")
    assert format_line(flac, AudioFormat(96_000, 24, 2)) == "FLAC 96KHz/24bit"

    mp3 = TrackMetadata(title="t", label="MP3", bitrate_kbps=320)
    assert format_line(mp3, AudioFormat(44_100, 16, 2)) == "MP3 320kbps"


def test_status_indicator_variants() -> None:
    assert status_indicator(False, False) == ""
    assert status_indicator(True, False) == "| PAUSED |"
    assert status_indicator(False, True) == "| LOOP |"
    assert status_indicator(True, True) == "| PAUSED | LOOP |"


def test_render_status_layout() -> None:
    metadata = TrackMetadata(title="Song", label="FLAC", artist="Artist", album="Album")
    text = render_status(_session(position=220_500, loop=True), metadata)

    assert text.splitlines() == [
        "Song",
        "Artist • Album",
        "FLAC 44.1KHz/16bit",
        "",
        "Time: 00:00:05",
        HELP_LINE,
        "",
        "| LOOP |",
    ]


def test_render_status_without_artist_skips_detail_line() -> None:
    metadata = TrackMetadata(title="song.flac", label="FLAC")
    lines = render_status(_session(), metadata).splitlines()
    assert lines[0] == "song.flac"
    assert lines[1] == "FLAC 44.1KHz/16bit"


def test_renderer_clears_screen_unless_disabled() -> None:
    metadata = TrackMetadata(title="Song", label="WAV")
    out = io.StringIO()
    StatusRenderer(metadata, out).render(_session())
    assert out.getvalue().startswith(CLEAR_SCREEN)

    plain = io.StringIO()
    StatusRenderer(metadata, plain, clear_screen=False)(_session())
    assert plain.getvalue().startswith("Song\n")

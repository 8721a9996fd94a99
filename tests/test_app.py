from pathlib import Path

import pytest

import termplay.app as app
from termplay.cli import parse_args
from termplay.core.session import PlaybackSession
from termplay.errors import ArgumentError, DecodeError


@pytest.fixture
def isolated(monkeypatch, tmp_path):
    monkeypatch.setenv("TERMPLAY_CONFIG_PATH", str(tmp_path / "settings.yaml"))
    monkeypatch.setattr(app, "_configure_logging", lambda *args, **kwargs: None)
    return tmp_path


def test_parse_args_requires_exactly_one_file() -> None:
    with pytest.raises(ArgumentError):
        parse_args([])
    with pytest.raises(ArgumentError):
        parse_args(["a.mp3", "b.mp3"])
    with pytest.raises(ArgumentError):
        parse_args(["--log-level", "chatty", "a.mp3"])

    args = parse_args(["--log-level", "debug", "a.mp3"])
    assert args.file == Path("a.mp3")
    assert args.log_level == "DEBUG"
    assert args.config is None


@pytest.mark.parametrize("argv", [[], ["one.wav", "two.wav"]])
def test_wrong_argument_count_exits_before_playback(isolated, monkeypatch, capsys, argv) -> None:
    def _fail(*args, **kwargs):  # pragma: no cover - must not be reached
        raise AssertionError("controller must not be created")

    monkeypatch.setattr(app.PlaybackController, "from_settings", _fail)

    assert app.run(argv) == 2
    assert "termplay: error:" in capsys.readouterr().err


def test_missing_file_exits_nonzero(isolated, capsys) -> None:
    assert app.run([str(isolated / "missing.flac")]) == 1
    assert "Cannot open" in capsys.readouterr().err


def test_unsupported_extension_exits_nonzero(isolated, capsys) -> None:
    target = isolated / "notes.txt"
    target.write_text("hello", encoding="utf-8")

    assert app.run([str(target)]) == 1
    assert "Unsupported file type" in capsys.readouterr().err


def test_successful_playback_exits_zero(isolated, monkeypatch) -> None:
    played: list[Path] = []

    class DummyController:
        def run(self, path: Path) -> PlaybackSession:
            played.append(path)
            return None  # type: ignore[return-value]

    monkeypatch.setattr(
        app.PlaybackController,
        "from_settings",
        classmethod(lambda cls, settings, poller: DummyController()),
    )

    assert app.run(["song.flac"]) == 0
    assert played == [Path("song.flac")]


def test_fatal_error_during_playback_maps_to_exit_code(isolated, monkeypatch, capsys) -> None:
    class BrokenController:
        def run(self, path: Path) -> PlaybackSession:
            raise DecodeError("corrupt frame")

    monkeypatch.setattr(
        app.PlaybackController,
        "from_settings",
        classmethod(lambda cls, settings, poller: BrokenController()),
    )

    assert app.run(["song.mp3"]) == 1
    assert "corrupt frame" in capsys.readouterr().err


def test_interrupt_exits_with_130(isolated, monkeypatch) -> None:
    class InterruptedController:
        def run(self, path: Path) -> PlaybackSession:
            raise KeyboardInterrupt

    monkeypatch.setattr(
        app.PlaybackController,
        "from_settings",
        classmethod(lambda cls, settings, poller: InterruptedController()),
    )

    assert app.run(["song.mp3"]) == app.EXIT_INTERRUPTED

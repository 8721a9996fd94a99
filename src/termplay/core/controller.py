"""Playback pipeline and loop/restart control."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, TextIO

from termplay.audio.decoding import decode
from termplay.audio.sink import AudioSink, speaker
from termplay.core.completion import CompletionSignal
from termplay.core.config import SettingsManager
from termplay.core.driver import SessionDriver
from termplay.core.input_poller import InputPoller
from termplay.core.media_metadata import read_metadata
from termplay.core.session import PlaybackSession
from termplay.ui.status import StatusRenderer

logger = logging.getLogger(__name__)


class PlaybackController:
    """Runs playback attempts for one file, repeating while loop is on."""

    def __init__(
        self,
        poller: InputPoller,
        *,
        sink: Optional[AudioSink] = None,
        decoder: Callable = decode,
        metadata_reader: Callable = read_metadata,
        out: Optional[TextIO] = None,
        buffer_seconds: float = 0.1,
        refresh_interval: float = 1.0,
        ffmpeg_fallback: bool = True,
        filename_fallback: bool = True,
        clear_screen: bool = True,
    ) -> None:
        self._poller = poller
        self._sink = sink if sink is not None else speaker
        self._decoder = decoder
        self._metadata_reader = metadata_reader
        self._out = out
        self._buffer_seconds = buffer_seconds
        self._refresh_interval = refresh_interval
        self._ffmpeg_fallback = ffmpeg_fallback
        self._filename_fallback = filename_fallback
        self._clear_screen = clear_screen
        self.attempts = 0

    @classmethod
    def from_settings(cls, settings: SettingsManager, poller: InputPoller, **kwargs) -> "PlaybackController":
        options = dict(
            buffer_seconds=settings.get_buffer_seconds(),
            refresh_interval=settings.get_refresh_interval(),
            ffmpeg_fallback=settings.get_ffmpeg_fallback(),
            filename_fallback=settings.get_filename_fallback(),
            clear_screen=settings.get_clear_screen(),
        )
        options.update(kwargs)
        return cls(poller, **options)

    def play_once(self, path: Path, loop: bool = False) -> PlaybackSession:
        """Play *path* once and return the completed session.

        The stream is closed and the sink released on every exit path.
        """
        stream, audio_format = self._decoder(path, ffmpeg_fallback=self._ffmpeg_fallback)
        session = PlaybackSession(
            source_path=path,
            stream=stream,
            format=audio_format,
            size_bytes=stream.size_bytes,
            loop=loop,
        )
        self.attempts += 1
        try:
            metadata = self._metadata_reader(
                path,
                stream.kind,
                session.size_bytes,
                filename_fallback=self._filename_fallback,
            )
            renderer = StatusRenderer(metadata, self._out, clear_screen=self._clear_screen)

            self._sink.init(audio_format.sample_rate, audio_format.channels, self._buffer_seconds)
            completion = CompletionSignal()
            self._sink.play(stream, completion.deliver, lambda _exc: completion.close())
            driver = SessionDriver(
                session,
                self._sink,
                self._poller,
                completion,
                renderer,
                refresh_interval=self._refresh_interval,
            )
            return driver.run()
        finally:
            self._sink.teardown()
            session.close()

    def run(self, path: Path) -> PlaybackSession:
        self._poller.start()
        session = self.play_once(path)
        while session.loop:
            logger.info("Loop enabled, restarting %s", session.file_name)
            session = self.play_once(path, loop=True)
        return session

"""Process-wide audio output binding.

`speaker` is the single sink instance used by the player.  It is bound to one
sample rate at a time: `init()` must run for every playback attempt because
successive streams may use different rates.
"""

from __future__ import annotations

import logging
from threading import Event, Lock, Thread, current_thread
from typing import Callable, Optional

from termplay.errors import AudioDeviceError

logger = logging.getLogger(__name__)

try:
    import sounddevice as sd
except (ImportError, OSError):  # pragma: no cover - environments without PortAudio
    sd = None


OutputFactory = Callable[[int, int, int], object]

_PAUSE_POLL_SECONDS = 0.05


def _sounddevice_output(sample_rate: int, channels: int, blocksize: int):
    if sd is None:
        raise AudioDeviceError("sounddevice is not available (is PortAudio installed?)")
    return sd.OutputStream(
        samplerate=sample_rate,
        channels=channels,
        dtype="float32",
        blocksize=blocksize,
    )


class AudioSink:
    """Streams one decoded stream at a time to an output device."""

    def __init__(self, output_factory: Optional[OutputFactory] = None) -> None:
        self._output_factory = output_factory or _sounddevice_output
        self._lock = Lock()
        self._output = None
        self._block_frames = 0
        self._paused = False
        self._thread: Optional[Thread] = None
        self._stop_event: Optional[Event] = None

    def init(self, sample_rate: int, channels: int, buffer_duration: float = 0.1) -> None:
        """Bind the sink to *sample_rate*, replacing any previous binding."""
        self.teardown()
        if sample_rate <= 0:
            raise AudioDeviceError(f"Invalid sample rate: {sample_rate}")
        block_frames = max(1, int(sample_rate * buffer_duration))
        try:
            output = self._output_factory(sample_rate, channels, block_frames)
            output.start()
        except AudioDeviceError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            raise AudioDeviceError(f"Cannot open audio output: {exc}") from exc
        self._output = output
        self._block_frames = block_frames
        self._paused = False
        logger.debug("Sink bound to %d Hz, %d frame buffer", sample_rate, block_frames)

    def lock(self) -> None:
        self._lock.acquire()

    def unlock(self) -> None:
        self._lock.release()

    def set_paused(self, paused: bool) -> None:
        """Halt or resume consumption. Callers must hold the sink lock."""
        self._paused = paused

    def play(
        self,
        stream,
        on_complete: Callable[[], None],
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> None:
        if self._output is None:
            raise AudioDeviceError("Audio sink used before init()")
        if self._thread is not None and self._thread.is_alive():
            raise AudioDeviceError("Audio sink is already playing")
        stop_event = Event()
        self._stop_event = stop_event
        self._thread = Thread(
            target=self._run,
            args=(stream, self._output, stop_event, on_complete, on_error),
            name="termplay-sink",
            daemon=True,
        )
        self._thread.start()

    def teardown(self) -> None:
        thread = self._thread
        if self._stop_event is not None:
            self._stop_event.set()
        if thread is not None and thread.is_alive() and thread is not current_thread():
            thread.join(timeout=1.5)
        self._thread = None
        self._stop_event = None
        output = self._output
        self._output = None
        self._block_frames = 0
        self._paused = False
        if output is not None:
            try:
                output.stop()
                output.close()
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Closing audio output failed: %s", exc)

    def _run(self, stream, output, stop_event: Event, on_complete, on_error) -> None:
        exhausted = False
        try:
            while not stop_event.is_set():
                with self._lock:
                    data = None if self._paused else stream.read(self._block_frames)
                if data is None:
                    stop_event.wait(_PAUSE_POLL_SECONDS)
                    continue
                if len(data) == 0:
                    exhausted = True
                    break
                output.write(data)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Playback failed: %s", exc)
            if on_error is not None:
                on_error(exc)
            return
        if exhausted:
            logger.debug("Stream exhausted at frame %d", stream.position)
            on_complete()


speaker = AudioSink()

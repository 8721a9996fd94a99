"""Session event loop.

The driver is the only code that changes `paused` and `loop`. It waits on the
input queue for at most the time left until the next idle tick; each tick
checks the completion signal and refreshes the elapsed time.
"""

from __future__ import annotations

import logging
import queue
import time
from typing import Callable

from termplay.core.completion import CompletionSignal
from termplay.core.input_poller import INPUT_CLOSED, InputPoller
from termplay.core.session import PlaybackSession
from termplay.errors import ClosedCompletionSignal

logger = logging.getLogger(__name__)

PAUSE_COMMAND = "1"
LOOP_COMMAND = "2"


class SessionDriver:
    def __init__(
        self,
        session: PlaybackSession,
        sink,
        poller: InputPoller,
        completion: CompletionSignal,
        render: Callable[[PlaybackSession], None],
        *,
        refresh_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session = session
        self._sink = sink
        self._poller = poller
        self._completion = completion
        self._render = render
        self._refresh_interval = refresh_interval
        self._clock = clock
        self._sleep = sleep

    def run(self) -> PlaybackSession:
        """Drive the session until its stream is exhausted and return it."""
        self._render(self.session)
        next_tick = self._clock() + self._refresh_interval
        while True:
            remaining = next_tick - self._clock()
            if remaining > 0:
                if self._poller.exhausted:
                    self._sleep(remaining)
                else:
                    try:
                        line = self._poller.get(timeout=remaining)
                    except queue.Empty:
                        pass
                    else:
                        if line is INPUT_CLOSED:
                            logger.info("Input closed, waiting for the end of the stream")
                        else:
                            self.handle_command(line)
                        continue
            next_tick = self._clock() + self._refresh_interval
            if self._tick():
                return self.session

    def handle_command(self, line: str) -> None:
        command = line.strip()
        if command == PAUSE_COMMAND:
            self.toggle_pause()
        elif command == LOOP_COMMAND:
            self.toggle_loop()
        self._render(self.session)

    def toggle_pause(self) -> None:
        self._sink.lock()
        try:
            self.session.paused = not self.session.paused
            self._sink.set_paused(self.session.paused)
        finally:
            self._sink.unlock()
        logger.info("%s %s", "Paused" if self.session.paused else "Resumed", self.session.file_name)

    def toggle_loop(self) -> None:
        self.session.loop = not self.session.loop
        logger.info("Loop %s", "on" if self.session.loop else "off")

    def _tick(self) -> bool:
        result = self._completion.peek()
        if result is True:
            self.session.mark_completed()
            logger.info("Playback of %s finished", self.session.file_name)
            return True
        if result is not None:
            raise ClosedCompletionSignal("Playback stopped before the end of the stream")
        if not self.session.paused:
            self._render(self.session)
        return False

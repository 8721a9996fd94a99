"""Background line reader feeding the session driver."""

from __future__ import annotations

import logging
import queue
import sys
from threading import Event, Thread
from typing import Optional, TextIO, Union

logger = logging.getLogger(__name__)


class _InputClosed:
    def __repr__(self) -> str:
        return "INPUT_CLOSED"


INPUT_CLOSED = _InputClosed()


class InputPoller:
    """Reads lines from *source* on a daemon thread and queues them.

    The reader is started once per process. When the source reaches EOF it
    enqueues `INPUT_CLOSED` and stops for good.
    """

    def __init__(self, source: Optional[TextIO] = None) -> None:
        self._source = source if source is not None else sys.stdin
        self._queue: "queue.Queue[Union[str, _InputClosed]]" = queue.Queue()
        self._thread: Optional[Thread] = None
        self._closed = Event()
        self._exhausted = False

    @property
    def closed(self) -> bool:
        """True once the reader thread has seen end of input."""
        return self._closed.is_set()

    @property
    def exhausted(self) -> bool:
        """True once the consumer has received `INPUT_CLOSED`."""
        return self._exhausted

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = Thread(target=self._run, name="termplay-input", daemon=True)
        self._thread.start()

    def get(self, timeout: Optional[float] = None) -> Union[str, _InputClosed]:
        """Return the next line or `INPUT_CLOSED`; raise queue.Empty on timeout."""
        if self._exhausted:
            return INPUT_CLOSED
        item = self._queue.get(timeout=timeout)
        if item is INPUT_CLOSED:
            self._exhausted = True
        return item

    def _run(self) -> None:
        try:
            for line in iter(self._source.readline, ""):
                self._queue.put(line)
        except (OSError, ValueError) as exc:
            logger.warning("Reading input failed: %s", exc)
        finally:
            logger.debug("Input closed")
            self._closed.set()
            self._queue.put(INPUT_CLOSED)

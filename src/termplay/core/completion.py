"""One-shot notification that a stream has been fully consumed."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

logger = logging.getLogger(__name__)


class CompletionSignal:
    def __init__(self) -> None:
        self._lock = Lock()
        self._value: Optional[bool] = None

    def deliver(self) -> None:
        with self._lock:
            if self._value is not None:
                logger.warning("Completion already signalled (%s), ignoring", self._value)
                return
            self._value = True

    def close(self) -> None:
        """Close the channel without a value; the receiver treats this as fatal."""
        with self._lock:
            if self._value is None:
                self._value = False

    def peek(self) -> Optional[bool]:
        """Return None while pending, True once completed, False if closed."""
        with self._lock:
            return self._value

"""
Client-side retention for the security log.

A monitor keeps only the most recent events; the store keeps all of them.
"""
import threading
from collections import deque
from typing import Iterable, List

from validations.domain.validation_event import ValidationEvent

DEFAULT_WINDOW_SIZE = 50


class RecentEventsWindow:
    """Thread-safe ring buffer of the newest validation events."""

    def __init__(self, capacity: int = DEFAULT_WINDOW_SIZE):
        self._buffer: deque = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._buffer.maxlen

    def load_snapshot(self, newest_first: Iterable[ValidationEvent]) -> None:
        """Replace the contents with a snapshot ordered newest first."""
        events = list(newest_first)[: self.capacity]
        with self._lock:
            self._buffer.clear()
            self._buffer.extend(reversed(events))

    def append(self, event: ValidationEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def newest_first(self) -> List[ValidationEvent]:
        with self._lock:
            return list(reversed(self._buffer))

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

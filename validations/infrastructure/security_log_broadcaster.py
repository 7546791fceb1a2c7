"""
In-process fan-out of validation events to monitoring sessions.

Each session owns a bounded deque; when a session falls behind, its
oldest undelivered events are dropped. Publishing never waits on a
reader.
"""
import logging
import threading
import time
from collections import deque
from typing import Iterable, Mapping, Optional
from uuid import uuid4

from django.conf import settings

from core.domain.events import EventHandler
from core.metrics import security_log_events_dropped_total, security_log_sessions
from validations.domain.events import ValidationRecorded
from validations.domain.validation_event import ValidationEvent

logger = logging.getLogger(__name__)


class MonitoringSession:
    """A single subscriber's channel."""

    def __init__(self, session_id: str, buffer_size: int):
        self.session_id = session_id
        self._buffer: deque = deque(maxlen=buffer_size)
        self._condition = threading.Condition()
        self._skip_ids = frozenset()
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def exclude(self, event_ids: Iterable) -> None:
        """Skip events already delivered in the snapshot."""
        with self._condition:
            self._skip_ids = frozenset(event_ids)

    def push(self, event: ValidationEvent) -> None:
        with self._condition:
            if self._closed:
                return
            if len(self._buffer) == self._buffer.maxlen:
                self.dropped += 1
                security_log_events_dropped_total.inc()
            self._buffer.append(event)
            self._condition.notify()

    def next_event(self, timeout: Optional[float] = None) -> Optional[ValidationEvent]:
        """
        Oldest pending event, waiting up to ``timeout`` seconds.

        Returns None on timeout or once the session is closed and drained.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._condition:
            while True:
                while self._buffer:
                    event = self._buffer.popleft()
                    if event.id not in self._skip_ids:
                        return event
                if self._closed:
                    return None
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return None
                self._condition.wait(remaining)

    def pending(self) -> int:
        with self._condition:
            return len(self._buffer)

    def close(self) -> None:
        with self._condition:
            self._closed = True
            self._condition.notify_all()


class SecurityLogBroadcaster(EventHandler):
    """
    Registry of open monitoring sessions.

    The session map is replaced wholesale on open/close, so ``broadcast``
    reads it without taking the registry lock.
    """

    def __init__(self, buffer_size: Optional[int] = None):
        self._buffer_size = buffer_size
        self._sessions: Mapping[str, MonitoringSession] = {}
        self._lock = threading.Lock()

    @property
    def buffer_size(self) -> int:
        if self._buffer_size is not None:
            return self._buffer_size
        return settings.SECURITY_LOG_SUBSCRIBER_BUFFER

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    def open_session(self, session_id: Optional[str] = None) -> MonitoringSession:
        session = MonitoringSession(session_id or uuid4().hex, self.buffer_size)
        with self._lock:
            sessions = dict(self._sessions)
            previous = sessions.get(session.session_id)
            sessions[session.session_id] = session
            self._sessions = sessions
        if previous is not None:
            previous.close()
        security_log_sessions.set(len(self._sessions))
        logger.info("Monitoring session opened", extra={"session_id": session.session_id})
        return session

    def close_session(self, session: MonitoringSession) -> None:
        """Close ``session``; a newer session reusing its id stays registered."""
        with self._lock:
            if self._sessions.get(session.session_id) is session:
                sessions = dict(self._sessions)
                del sessions[session.session_id]
                self._sessions = sessions
        session.close()
        security_log_sessions.set(len(self._sessions))
        logger.info(
            "Monitoring session closed",
            extra={"session_id": session.session_id, "dropped_events": session.dropped},
        )

    def broadcast(self, event: ValidationEvent) -> None:
        for session in self._sessions.values():
            session.push(event)

    async def handle(self, event: ValidationRecorded) -> None:
        self.broadcast(event.validation_event)


# Global broadcaster instance
security_log_broadcaster = SecurityLogBroadcaster()

"""
Unit tests for the tail_security_log console monitor.
"""
import json
from io import StringIO

from conftest import FIXED_NOW
from validations.application.services.recent_events_window import RecentEventsWindow
from validations.domain.validation_event import (
    ValidationDecision,
    ValidationErrorCode,
    ValidationEvent,
)
from validations.management.commands.tail_security_log import Command, parse_sse


def event_dict(api_key: str) -> dict:
    return ValidationEvent.record(
        ValidationDecision(ValidationErrorCode.REVOKED),
        api_key=api_key,
        domain="example.com",
        ip_address="203.0.113.9",
        at=FIXED_NOW,
    ).to_dict()


class TestParseSse:
    def test_frames_and_keepalives(self):
        lines = [
            "event: snapshot",
            "data: []",
            "",
            ": keepalive",
            "",
            "event: security_log",
            'data: {"a":',
            "data: 1}",
            "",
        ]
        assert list(parse_sse(lines)) == [
            ("snapshot", "[]"),
            ("security_log", '{"a":\n1}'),
        ]

    def test_unnamed_event_defaults_to_message(self):
        assert list(parse_sse(["data: x"])) == [("message", "x")]


class TestTailCommand:
    def test_snapshot_then_live_events_fill_the_window(self):
        snapshot = [event_dict(f"LK-{i}") for i in range(3)]
        live = event_dict("LK-LIVE")
        lines = [
            "event: snapshot",
            f"data: {json.dumps(snapshot)}",
            "",
            "event: security_log",
            f"data: {json.dumps(live)}",
            "",
        ]
        out = StringIO()
        command = Command(stdout=out)
        window = RecentEventsWindow(capacity=3)

        command.consume(lines, window)

        keys = [e.api_key for e in window.newest_first()]
        assert keys == ["LK-LIVE", "LK-0", "LK-1"]
        assert "LK-LIVE" in out.getvalue()
        assert "REVOKED" in out.getvalue()

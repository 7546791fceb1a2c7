"""
Integration tests for the live security log stream.
"""
import json

import pytest
from django.core.signals import request_finished
from django.db import close_old_connections

from validations.infrastructure.security_log_broadcaster import security_log_broadcaster


def read_frame(stream) -> bytes:
    """Next non-keepalive frame from a streaming response."""
    while True:
        frame = next(stream)
        if not frame.startswith(b":"):
            return frame


def close_stream(response) -> None:
    """Close like the test client does, without dropping the test transaction."""
    request_finished.disconnect(close_old_connections)
    try:
        response.close()
    finally:
        request_finished.connect(close_old_connections)


def parse_frame(frame: bytes):
    event_line, data_line = frame.decode().strip().split("\n")
    return event_line[len("event: "):], json.loads(data_line[len("data: "):])


@pytest.mark.django_db
@pytest.mark.integration
class TestSecurityLogStream:
    """Integration tests for GET /admin/logs/stream."""

    def test_snapshot_then_live_events(self, admin_client, api_client, issue_key):
        issued = issue_key()
        api_client.post("/validate", {"api_key": "LK-BEFORE"}, format="json")

        response = admin_client.get("/admin/logs/stream", HTTP_X_MONITORING_SESSION="console-1")

        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/event-stream")
        assert response["Cache-Control"] == "no-cache"
        stream = iter(response.streaming_content)
        try:
            event, snapshot = parse_frame(read_frame(stream))
            assert event == "snapshot"
            assert [entry["api_key"] for entry in snapshot] == ["LK-BEFORE"]
            assert security_log_broadcaster.session_count == 1

            api_client.post(
                "/validate",
                {"api_key": issued["apiKey"], "secret": issued["apiSecret"]},
                format="json",
            )

            event, live = parse_frame(read_frame(stream))
            assert event == "security_log"
            assert live["api_key"] == issued["apiKey"]
            assert live["result"] == "allow"
        finally:
            close_stream(response)

        assert security_log_broadcaster.session_count == 0

    def test_keepalive_when_idle(self, admin_client):
        response = admin_client.get("/admin/logs/stream")
        stream = iter(response.streaming_content)
        try:
            assert next(stream).startswith(b"event: snapshot")
            assert next(stream) == b": keepalive\n\n"
        finally:
            close_stream(response)

    def test_requires_admin(self, customer_client, api_client):
        assert customer_client.get("/admin/logs/stream").status_code == 403
        assert api_client.get("/admin/logs/stream").status_code == 401
        assert security_log_broadcaster.session_count == 0

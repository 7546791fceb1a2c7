"""
Django management command to watch the security log live.

Connects to ``/admin/logs/stream`` as an admin and keeps the most recent
events in a fixed-size window, printing each new one as it arrives.
"""

import json
import logging
import os
from typing import Iterable, Iterator, Optional, Tuple

import requests
from django.core.management.base import BaseCommand, CommandError

from validations.application.services.recent_events_window import (
    DEFAULT_WINDOW_SIZE,
    RecentEventsWindow,
)
from validations.domain.validation_event import ValidationEvent

logger = logging.getLogger(__name__)


def parse_sse(lines: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """
    Turn Server-Sent Events lines into ``(event, data)`` pairs.

    Comment lines (keepalives) are ignored; multi-line data is joined
    with newlines.
    """
    event: Optional[str] = None
    data = []
    for line in lines:
        if line == "":
            if data:
                yield event or "message", "\n".join(data)
            event, data = None, []
        elif line.startswith(":"):
            continue
        else:
            field, _, value = line.partition(":")
            value = value[1:] if value.startswith(" ") else value
            if field == "event":
                event = value
            elif field == "data":
                data.append(value)
    if data:
        yield event or "message", "\n".join(data)


def format_event(event: ValidationEvent) -> str:
    return (
        f"{event.timestamp.isoformat()} {event.result.value.upper():5} "
        f"{event.error_code.value:18} key={event.api_key or '-'} "
        f"domain={event.domain or '-'} ip={event.ip_address or '-'}"
    )


class Command(BaseCommand):
    """Command to tail the security log."""

    help = "Stream validation events from a running server"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--url",
            type=str,
            default=os.environ.get("LICENSE_SERVICE_URL", "http://localhost:8000"),
            help="Service base URL (default: $LICENSE_SERVICE_URL or http://localhost:8000)",
        )
        parser.add_argument(
            "--token",
            type=str,
            default=os.environ.get("LICENSE_SERVICE_TOKEN", ""),
            help="Admin bearer token (default: $LICENSE_SERVICE_TOKEN)",
        )
        parser.add_argument(
            "--window",
            type=int,
            default=DEFAULT_WINDOW_SIZE,
            help=f"Events kept on screen (default: {DEFAULT_WINDOW_SIZE})",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if not options["token"]:
            raise CommandError("An admin bearer token is required (--token)")

        window = RecentEventsWindow(options["window"])
        url = options["url"].rstrip("/") + "/admin/logs/stream"
        try:
            with requests.get(
                url,
                headers={
                    "Authorization": f"Bearer {options['token']}",
                    "Accept": "text/event-stream",
                },
                stream=True,
                timeout=(5, None),
            ) as response:
                if response.status_code != 200:
                    raise CommandError(f"Stream refused ({response.status_code}): {response.text}")
                self.consume(response.iter_lines(decode_unicode=True), window)
        except requests.RequestException as e:
            raise CommandError(f"Connection to {url} failed: {e}") from e
        except KeyboardInterrupt:
            self.stdout.write("Stopped")

    def consume(self, lines: Iterable[str], window: RecentEventsWindow) -> None:
        for event_name, data in parse_sse(lines):
            if event_name == "snapshot":
                window.load_snapshot(ValidationEvent.from_dict(item) for item in json.loads(data))
                for event in reversed(window.newest_first()):
                    self.stdout.write(format_event(event))
                self.stdout.write(self.style.SUCCESS(f"-- {len(window)} recent events, live --"))
            elif event_name == "security_log":
                event = ValidationEvent.from_dict(json.loads(data))
                window.append(event)
                self.stdout.write(format_event(event))

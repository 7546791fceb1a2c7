"""
Django management command to relay security log events from RabbitMQ.

Runs the event bus consumer in the foreground so events published by
other processes reach this process's monitoring sessions, and echoes
each relayed event.
"""

import json
import logging

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.domain.events import EventHandler
from core.infrastructure.events import event_bus
from validations.domain.events import ValidationRecorded

logger = logging.getLogger(__name__)


class EchoHandler(EventHandler):
    """Writes every relayed validation event as one JSON line."""

    def __init__(self, stdout):
        self.stdout = stdout

    async def handle(self, event: ValidationRecorded) -> None:
        self.stdout.write(json.dumps(event.validation_event.to_dict()))


class Command(BaseCommand):
    """Command to consume relayed security log events."""

    help = "Consume security log events relayed through RabbitMQ (requires USE_RABBITMQ)"

    def handle(self, *args, **options):
        """Execute the command."""
        if not settings.USE_RABBITMQ:
            raise CommandError("USE_RABBITMQ is disabled; there is nothing to relay")

        event_bus.subscribe(ValidationRecorded, EchoHandler(self.stdout))
        self.stdout.write(
            self.style.SUCCESS(f"Relaying from exchange {settings.SECURITY_LOG_EXCHANGE}")
        )
        try:
            event_bus.consume()
        except KeyboardInterrupt:
            event_bus.stop()
            self.stdout.write("Stopped")

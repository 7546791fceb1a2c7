"""
Unit tests for the in-memory event bus and the RabbitMQ relay codec.
"""
import uuid
from datetime import datetime, timezone

import pytest

from core.domain.events import EventHandler
from core.infrastructure.events import InMemoryEventBus
from core.infrastructure.rabbitmq_event_bus import RabbitMQEventBus
from credentials.domain.events import CredentialRevoked
from validations.domain.events import ValidationRecorded
from validations.domain.validation_event import (
    ValidationDecision,
    ValidationErrorCode,
    ValidationEvent,
)


class RecordingHandler(EventHandler):
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


class FailingHandler(EventHandler):
    async def handle(self, event):
        raise RuntimeError("boom")


class FakeMessage:
    def __init__(self):
        self.acked = False
        self.rejected = False

    def ack(self):
        self.acked = True

    def reject(self, requeue=False):
        self.rejected = True


def validation_recorded() -> ValidationRecorded:
    event = ValidationEvent.record(
        ValidationDecision(ValidationErrorCode.NOT_FOUND),
        api_key="LK-NOPE",
        domain="example.com",
        ip_address="203.0.113.9",
        at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    return ValidationRecorded(validation_event=event)


@pytest.mark.asyncio
class TestInMemoryEventBus:
    async def test_publish_reaches_subscribers(self):
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(CredentialRevoked, handler)

        event = CredentialRevoked(credential_id=uuid.uuid4())
        await bus.publish(event)

        assert handler.events == [event]

    async def test_subscribe_is_idempotent(self):
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(CredentialRevoked, handler)
        bus.subscribe(CredentialRevoked, handler)

        await bus.publish(CredentialRevoked(credential_id=uuid.uuid4()))

        assert len(handler.events) == 1

    async def test_failing_handler_does_not_reach_publisher(self):
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(CredentialRevoked, FailingHandler())
        bus.subscribe(CredentialRevoked, handler)

        await bus.publish(CredentialRevoked(credential_id=uuid.uuid4()))

        assert len(handler.events) == 1


class TestRabbitMQRelayCodec:
    """Encoding and consuming relayed events; no broker involved."""

    def make_bus(self):
        bus = RabbitMQEventBus(broker_url="memory://", exchange_name="test.security_log")
        bus.register_relay(ValidationRecorded, ValidationRecorded.from_dict)
        return bus

    def test_routing_key(self):
        assert RabbitMQEventBus.routing_key("ValidationRecorded") == "event.validationrecorded"

    def test_round_trip_from_another_process(self):
        sender, receiver = self.make_bus(), self.make_bus()
        original = validation_recorded()

        decoded = receiver.decode(sender.encode(original))

        assert decoded.validation_event == original.validation_event

    def test_own_echo_and_unknown_types_are_ignored(self):
        bus = self.make_bus()
        assert bus.decode(bus.encode(validation_recorded())) is None
        assert bus.decode({"event_type": "Unknown", "origin": "elsewhere", "event": {}}) is None

    def test_handle_message_dispatches_locally_and_acks(self):
        sender, receiver = self.make_bus(), self.make_bus()
        handler = RecordingHandler()
        receiver.subscribe(ValidationRecorded, handler)
        message = FakeMessage()

        receiver._handle_message(sender.encode(validation_recorded()), message)

        assert message.acked
        assert len(handler.events) == 1

    def test_malformed_message_is_rejected(self):
        receiver = self.make_bus()
        message = FakeMessage()

        receiver._handle_message(
            {"event_type": "ValidationRecorded", "origin": "elsewhere", "event": {"data": {}}},
            message,
        )

        assert message.rejected
        assert not message.acked

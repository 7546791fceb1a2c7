"""
In-memory event bus implementation.

Handlers run in the publishing process. When USE_RABBITMQ is enabled the
bus also relays selected events to other processes (see
rabbitmq_event_bus).
"""
import asyncio
import logging
from typing import Dict, List, Type

from django.conf import settings

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-memory event bus implementation.

    Handlers for one event run concurrently; a failing handler is logged
    and never propagates to the publisher.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        handlers = self._handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))

    def ensure_relay_started(self) -> None:
        """Single-process bus: every event is already local."""

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        await self.dispatch_local(event)

    async def dispatch_local(self, event: DomainEvent) -> None:
        handlers = self.handlers_for(type(event))

        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type)
            return

        await asyncio.gather(
            *(self._handle_event(handler, event) for handler in handlers),
            return_exceptions=True,
        )

    async def _handle_event(self, handler: EventHandler, event: DomainEvent) -> None:
        """
        Handle an event with a specific handler.

        Args:
            handler: The handler to use
            event: The event to handle
        """
        try:
            await handler.handle(event)
        except Exception as e:
            logger.error(
                "Error handling %s with %s: %s",
                event.event_type,
                handler.__class__.__name__,
                e,
                exc_info=True,
            )
            raise


def build_event_bus() -> InMemoryEventBus:
    """Use RabbitMQ relaying when enabled, the plain in-memory bus otherwise."""
    if settings.USE_RABBITMQ:
        from core.infrastructure.rabbitmq_event_bus import RabbitMQEventBus

        return RabbitMQEventBus(
            broker_url=settings.RABBITMQ_URL,
            exchange_name=settings.SECURITY_LOG_EXCHANGE,
        )
    return InMemoryEventBus()


# Global event bus instance
event_bus = build_event_bus()

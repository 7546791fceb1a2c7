"""
Event handlers for domain events.

Audit logging for account and key lifecycle events, plus wiring of the
security log broadcaster to validation events.
"""
import logging

from core.domain.events import DomainEvent, EventHandler
from credentials.domain.events import (
    CredentialDomainsUpdated,
    CredentialIssued,
    CredentialRevoked,
)
from identities.domain.events import IdentityRegistered
from products.domain.events import ProductCreated
from validations.domain.events import ValidationRecorded

logger = logging.getLogger(__name__)

AUDITED_EVENTS = (
    IdentityRegistered,
    ProductCreated,
    CredentialIssued,
    CredentialDomainsUpdated,
    CredentialRevoked,
)

_registered = False


class AuditLogEventHandler(EventHandler):
    """Writes every lifecycle event to the ``audit`` log stream."""

    async def handle(self, event: DomainEvent) -> None:
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
                "data": event.payload(),
            },
        )


def register_event_handlers(bus=None):
    """
    Register all event handlers with the event bus.

    Safe to call more than once; later calls are no-ops for the global bus.
    """
    global _registered
    from core.infrastructure.events import event_bus
    from core.infrastructure.rabbitmq_event_bus import RabbitMQEventBus
    from validations.infrastructure.security_log_broadcaster import security_log_broadcaster

    target = bus or event_bus
    if target is event_bus and _registered:
        return

    audit_handler = AuditLogEventHandler()
    for event_type in AUDITED_EVENTS:
        target.subscribe(event_type, audit_handler)

    target.subscribe(ValidationRecorded, security_log_broadcaster)
    if isinstance(target, RabbitMQEventBus):
        target.register_relay(ValidationRecorded, ValidationRecorded.from_dict)

    if target is event_bus:
        _registered = True
    logger.info("Event handlers registered")

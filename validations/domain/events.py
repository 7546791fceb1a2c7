"""
Validation domain events.
"""
from dataclasses import dataclass
from typing import Any, Dict

from core.domain.events import DomainEvent
from validations.domain.validation_event import ValidationEvent


@dataclass(frozen=True, kw_only=True)
class ValidationRecorded(DomainEvent):
    """Event raised for every validation attempt; feeds the security log."""

    validation_event: ValidationEvent

    @property
    def aggregate_id(self) -> str:
        return str(self.validation_event.id)

    def payload(self) -> Dict[str, Any]:
        return self.validation_event.to_dict()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationRecorded":
        """Rebuild from ``to_dict`` output, e.g. after relaying through RabbitMQ."""
        return cls(validation_event=ValidationEvent.from_dict(data["data"]))

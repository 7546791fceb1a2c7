"""
Identity domain events.
"""
import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class IdentityRegistered(DomainEvent):
    """Event raised when an identity is created."""

    identity_id: uuid.UUID
    role: str

    @property
    def aggregate_id(self) -> str:
        return str(self.identity_id)

    def payload(self):
        return {"identity_id": str(self.identity_id), "role": self.role}

"""
Credential domain events.
"""
import uuid
from dataclasses import dataclass
from typing import Tuple

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class CredentialIssued(DomainEvent):
    """Event raised when a license key is issued."""

    credential_id: uuid.UUID
    owner_identity_id: uuid.UUID
    product_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.credential_id)

    def payload(self):
        return {
            "credential_id": str(self.credential_id),
            "owner_identity_id": str(self.owner_identity_id),
            "product_id": str(self.product_id),
        }


@dataclass(frozen=True, kw_only=True)
class CredentialDomainsUpdated(DomainEvent):
    """Event raised when a key's domain whitelist is replaced."""

    credential_id: uuid.UUID
    allowed_domains: Tuple[str, ...]

    @property
    def aggregate_id(self) -> str:
        return str(self.credential_id)

    def payload(self):
        return {
            "credential_id": str(self.credential_id),
            "allowed_domains": list(self.allowed_domains),
        }


@dataclass(frozen=True, kw_only=True)
class CredentialRevoked(DomainEvent):
    """Event raised when a license key is revoked."""

    credential_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.credential_id)

    def payload(self):
        return {"credential_id": str(self.credential_id)}

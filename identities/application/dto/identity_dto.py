"""
Identity DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime

from identities.domain.identity import Identity


@dataclass
class IdentityDTO:
    """Public view of an identity. Never carries the password hash."""

    id: uuid.UUID
    email: str
    full_name: str
    role: str
    created_at: datetime

    @classmethod
    def from_entity(cls, identity: Identity) -> "IdentityDTO":
        return cls(
            id=identity.id,
            email=str(identity.email),
            full_name=identity.full_name,
            role=identity.role.value,
            created_at=identity.created_at,
        )


@dataclass
class LoginResponseDTO:
    """Bearer token plus the identity it belongs to."""

    token: str
    expires_at: datetime
    user: IdentityDTO

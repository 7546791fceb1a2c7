"""
Credential (license key) domain entity.

A credential binds a public key string and a hashed secret to an owner
identity and a product. Revocation is a stored flag; expiry is a time
comparison. Either makes the key unusable.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from core.domain.value_objects import DomainWhitelist
from credentials.domain.services import secret_matches


class CredentialStatus(str, Enum):
    """Stored credential status."""

    ACTIVE = "active"
    REVOKED = "revoked"


@dataclass(frozen=True)
class Credential:
    """
    Credential domain entity.

    Only the sha256 of the secret is held; the plaintext never reaches
    this object.
    """

    id: uuid.UUID
    key_string: str
    secret_hash: str
    owner_identity_id: uuid.UUID
    product_id: uuid.UUID
    status: CredentialStatus
    expires_at: Optional[datetime]
    allowed_domains: DomainWhitelist
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate credential entity."""
        if not self.key_string or len(self.key_string) > 100:
            raise ValueError("Invalid key string")
        if not self.secret_hash or len(self.secret_hash) != 64:
            raise ValueError("Invalid secret hash")

    @classmethod
    def create(
        cls,
        owner_identity_id: uuid.UUID,
        product_id: uuid.UUID,
        key_string: str,
        secret_hash: str,
        expires_at: Optional[datetime],
        now: datetime,
        credential_id: Optional[uuid.UUID] = None,
    ) -> "Credential":
        """New active credential with an unrestricted whitelist."""
        return cls(
            id=credential_id or uuid.uuid4(),
            key_string=key_string,
            secret_hash=secret_hash,
            owner_identity_id=owner_identity_id,
            product_id=product_id,
            status=CredentialStatus.ACTIVE,
            expires_at=expires_at,
            allowed_domains=DomainWhitelist(),
            created_at=now,
            updated_at=now,
        )

    @property
    def is_revoked(self) -> bool:
        return self.status == CredentialStatus.REVOKED

    def is_expired(self, at: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= at

    def is_active(self, at: datetime) -> bool:
        return not self.is_revoked and not self.is_expired(at)

    def verify_secret(self, presented: str) -> bool:
        return secret_matches(presented, self.secret_hash)

    def with_allowed_domains(self, whitelist: DomainWhitelist, at: datetime) -> "Credential":
        return replace(self, allowed_domains=whitelist, updated_at=at)

    def revoke(self, at: datetime) -> "Credential":
        """Revoke the credential. Revoking twice returns the same object."""
        if self.is_revoked:
            return self
        return replace(self, status=CredentialStatus.REVOKED, updated_at=at)

"""
Credential DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from credentials.domain.credential import Credential


@dataclass
class IssuedCredentialDTO:
    """
    Issuance response.

    The only DTO that carries the plaintext secret.
    """

    id: uuid.UUID
    key_string: str
    secret: str
    owner_identity_id: uuid.UUID
    product_id: uuid.UUID
    expires_at: Optional[datetime]
    created_at: datetime


@dataclass
class CredentialDTO:
    """Read view of a credential. Never carries the secret or its hash."""

    id: uuid.UUID
    key_string: str
    owner_identity_id: uuid.UUID
    product_id: uuid.UUID
    product_name: str
    status: str
    is_expired: bool
    expires_at: Optional[datetime]
    allowed_domains: List[str]
    created_at: datetime

    @classmethod
    def from_entity(
        cls, credential: Credential, product_name: str, at: datetime
    ) -> "CredentialDTO":
        return cls(
            id=credential.id,
            key_string=credential.key_string,
            owner_identity_id=credential.owner_identity_id,
            product_id=credential.product_id,
            product_name=product_name,
            status=credential.status.value,
            is_expired=credential.is_expired(at),
            expires_at=credential.expires_at,
            allowed_domains=credential.allowed_domains.to_list(),
            created_at=credential.created_at,
        )

"""
AuthToken domain entity.

Bearer tokens handed out at login. Only the sha256 of the token is
stored; the raw value is returned to the client once.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional, Tuple

from identities.domain.services import generate_token, hash_token


@dataclass(frozen=True)
class AuthToken:
    """Stored bearer token."""

    id: uuid.UUID
    identity_id: uuid.UUID
    token_hash: str
    created_at: datetime
    expires_at: datetime
    revoked_at: Optional[datetime] = None

    @classmethod
    def issue(
        cls, identity_id: uuid.UUID, ttl: timedelta, now: datetime
    ) -> Tuple["AuthToken", str]:
        """Create a token for ``identity_id``; returns the entity and the raw token."""
        raw_token = generate_token()
        token = cls(
            id=uuid.uuid4(),
            identity_id=identity_id,
            token_hash=hash_token(raw_token),
            created_at=now,
            expires_at=now + ttl,
        )
        return token, raw_token

    def is_active(self, at: datetime) -> bool:
        return self.revoked_at is None and at < self.expires_at

    def revoke(self, at: datetime) -> "AuthToken":
        if self.revoked_at is not None:
            return self
        return replace(self, revoked_at=at)

"""
Identity domain entity.

An identity is an account that can sign in: an administrator or a
customer. Its role is fixed when it is created.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email, Role
from identities.domain.services import verify_password


@dataclass(frozen=True)
class Identity:
    """Identity domain entity."""

    id: uuid.UUID
    email: Email
    password_hash: str
    full_name: str
    role: Role
    created_at: datetime

    def __post_init__(self):
        """Validate identity entity."""
        if not self.password_hash:
            raise ValueError("Password hash is required")
        if len(self.full_name) > 255:
            raise ValueError("Full name too long")
        if not isinstance(self.role, Role):
            raise ValueError(f"Invalid role: {self.role}")

    @classmethod
    def create(
        cls,
        email: str,
        password_hash: str,
        full_name: str = "",
        role: Role = Role.CUSTOMER,
        identity_id: Optional[uuid.UUID] = None,
    ) -> "Identity":
        return cls(
            id=identity_id or uuid.uuid4(),
            email=Email.parse(email),
            password_hash=password_hash,
            full_name=(full_name or "").strip(),
            role=role,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def check_password(self, raw_password: str) -> bool:
        return verify_password(raw_password, self.password_hash)

"""
Caller context and access scoping.

Every application operation receives an explicit CallerContext built
server-side from the bearer token; nothing reads a process-wide
"current user". AccessPolicy checks run before the operation touches
any state.
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from core.domain.exceptions import ForbiddenError
from core.domain.value_objects import Role


@dataclass(frozen=True)
class CallerContext:
    """Authenticated caller identity and role."""

    identity_id: UUID
    role: Role
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class AccessPolicy:
    """Admin-vs-customer visibility and ownership rules."""

    @staticmethod
    def require_admin(caller: CallerContext, action: str) -> None:
        if not caller.is_admin:
            raise ForbiddenError(f"Only administrators may {action}")

    @staticmethod
    def require_owner_or_admin(caller: CallerContext, owner_id: UUID, action: str) -> None:
        if caller.is_admin:
            return
        if caller.identity_id != owner_id:
            raise ForbiddenError(f"You may only {action} on license keys you own")

    @staticmethod
    def owner_scope(caller: CallerContext) -> Optional[UUID]:
        """
        Owner filter for list reads.

        Returns None for admins (no filter), otherwise the caller's own id.
        """
        return None if caller.is_admin else caller.identity_id

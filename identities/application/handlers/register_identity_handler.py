"""
RegisterIdentityHandler.

Handles self-service registration and operator-created admins.
"""
import logging

from core.domain.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidFieldError,
    MissingFieldError,
)
from core.domain.value_objects import Role
from core.infrastructure.events import event_bus
from identities.application.commands.register_identity import RegisterIdentityCommand
from identities.application.dto.identity_dto import IdentityDTO
from identities.domain.events import IdentityRegistered
from identities.domain.identity import Identity
from identities.domain.services import MIN_PASSWORD_LENGTH, hash_password
from identities.ports.identity_repository import IdentityRepository

logger = logging.getLogger(__name__)


class RegisterIdentityHandler:
    """Handler for RegisterIdentityCommand."""

    def __init__(self, identity_repository: IdentityRepository):
        """Initialize handler with repositories."""
        self.identity_repository = identity_repository

    async def handle(
        self, command: RegisterIdentityCommand, role: Role = Role.CUSTOMER
    ) -> IdentityDTO:
        """
        Register an identity.

        ``role`` is not reachable from the public API; only the
        ``create_admin`` management command passes Role.ADMIN.

        Raises:
            MissingFieldError: If email or password is blank
            InvalidFieldError: If the password is too short
            EmailAlreadyRegisteredError: If the email is taken
        """
        if not (command.email or "").strip():
            raise MissingFieldError("email")
        if not command.password:
            raise MissingFieldError("password")
        if len(command.password) < MIN_PASSWORD_LENGTH:
            raise InvalidFieldError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        try:
            identity = Identity.create(
                email=command.email,
                password_hash=hash_password(command.password),
                full_name=command.full_name,
                role=role,
            )
        except ValueError as e:
            raise InvalidFieldError(str(e)) from e
        if await self.identity_repository.find_by_email(str(identity.email)):
            raise EmailAlreadyRegisteredError()

        saved = await self.identity_repository.save(identity)

        await event_bus.publish(IdentityRegistered(identity_id=saved.id, role=saved.role.value))
        logger.info(
            "Identity registered",
            extra={"identity_id": str(saved.id), "role": saved.role.value},
        )
        return IdentityDTO.from_entity(saved)

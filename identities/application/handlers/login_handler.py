"""
Login and logout handlers.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable

from django.conf import settings

from core.domain.clock import utc_now
from core.domain.exceptions import InvalidLoginError, MissingFieldError
from identities.application.commands.login import LoginCommand, LogoutCommand
from identities.application.dto.identity_dto import IdentityDTO, LoginResponseDTO
from identities.domain.auth_token import AuthToken
from identities.domain.services import hash_password, hash_token
from identities.ports.auth_token_repository import AuthTokenRepository
from identities.ports.identity_repository import IdentityRepository

logger = logging.getLogger(__name__)


class LoginHandler:
    """Handler for LoginCommand."""

    def __init__(
        self,
        identity_repository: IdentityRepository,
        auth_token_repository: AuthTokenRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.identity_repository = identity_repository
        self.auth_token_repository = auth_token_repository
        self.clock = clock

    async def handle(self, command: LoginCommand) -> LoginResponseDTO:
        """
        Verify the password and issue a bearer token.

        Raises:
            MissingFieldError: If email or password is blank
            InvalidLoginError: If the pair does not match an identity
        """
        if not (command.email or "").strip():
            raise MissingFieldError("email")
        if not command.password:
            raise MissingFieldError("password")

        identity = await self.identity_repository.find_by_email(command.email.strip().lower())
        if identity is None:
            # Spend the same hashing time as a real check
            hash_password(command.password)
            raise InvalidLoginError()
        if not identity.check_password(command.password):
            logger.info("Failed login", extra={"identity_id": str(identity.id)})
            raise InvalidLoginError()

        token, raw_token = AuthToken.issue(
            identity.id,
            ttl=timedelta(hours=settings.AUTH_TOKEN_TTL_HOURS),
            now=self.clock(),
        )
        await self.auth_token_repository.save(token)

        logger.info("Login succeeded", extra={"identity_id": str(identity.id)})
        return LoginResponseDTO(
            token=raw_token,
            expires_at=token.expires_at,
            user=IdentityDTO.from_entity(identity),
        )


class LogoutHandler:
    """Handler for LogoutCommand. Revoking an unknown or revoked token is a no-op."""

    def __init__(
        self,
        auth_token_repository: AuthTokenRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.auth_token_repository = auth_token_repository
        self.clock = clock

    async def handle(self, command: LogoutCommand) -> None:
        token = await self.auth_token_repository.find_by_hash(hash_token(command.raw_token))
        if token is None or token.revoked_at is not None:
            return
        await self.auth_token_repository.save(token.revoke(self.clock()))
        logger.info("Token revoked", extra={"identity_id": str(token.identity_id)})

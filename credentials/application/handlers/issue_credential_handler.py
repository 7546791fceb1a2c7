"""
IssueCredentialHandler.

Handles the issue credential command.
"""
import logging
from datetime import datetime
from typing import Callable

from django.conf import settings

from core.domain.access import AccessPolicy
from core.domain.clock import utc_now
from core.domain.exceptions import (
    DuplicateKeyError,
    IdentityNotFoundError,
    KeyStringCollisionError,
    ProductNotFoundError,
)
from core.domain.value_objects import Duration
from core.infrastructure.events import event_bus
from core.metrics import credential_key_collisions_total, credentials_issued_total
from credentials.application.commands.issue_credential import IssueCredentialCommand
from credentials.application.dto.credential_dto import IssuedCredentialDTO
from credentials.domain.credential import Credential
from credentials.domain.events import CredentialIssued
from credentials.domain.services import generate_key_string, generate_secret, hash_secret
from credentials.ports.credential_repository import CredentialRepository
from identities.ports.identity_repository import IdentityRepository
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class IssueCredentialHandler:
    """Handler for IssueCredentialCommand."""

    def __init__(
        self,
        identity_repository: IdentityRepository,
        product_repository: ProductRepository,
        credential_repository: CredentialRepository,
        key_generator: Callable[[str], str] = generate_key_string,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize handler with repositories."""
        self.identity_repository = identity_repository
        self.product_repository = product_repository
        self.credential_repository = credential_repository
        self.key_generator = key_generator
        self.clock = clock

    async def handle(self, command: IssueCredentialCommand) -> IssuedCredentialDTO:
        """
        Handle issue credential command.

        Args:
            command: IssueCredentialCommand

        Returns:
            IssuedCredentialDTO including the one-time plaintext secret

        Raises:
            ForbiddenError: If the caller is not an admin
            InvalidDurationError: If ttl_days is not a positive integer
            IdentityNotFoundError: If the target identity does not exist
            ProductNotFoundError: If the product does not exist
            DuplicateKeyError: If no unique key string could be generated
        """
        AccessPolicy.require_admin(command.caller, "issue license keys")

        duration = None if command.ttl_days is None else Duration.from_days(command.ttl_days)

        if await self.identity_repository.find_by_id(command.owner_identity_id) is None:
            raise IdentityNotFoundError(f"Identity {command.owner_identity_id} not found")
        if await self.product_repository.find_by_id(command.product_id) is None:
            raise ProductNotFoundError(f"Product {command.product_id} not found")

        secret = generate_secret()
        now = self.clock()
        expires_at = duration.expires_after(now) if duration else None

        saved = None
        max_attempts = settings.CREDENTIAL_KEY_MAX_ATTEMPTS
        for attempt in range(1, max_attempts + 1):
            credential = Credential.create(
                owner_identity_id=command.owner_identity_id,
                product_id=command.product_id,
                key_string=self.key_generator(settings.CREDENTIAL_KEY_PREFIX),
                secret_hash=hash_secret(secret),
                expires_at=expires_at,
                now=now,
            )
            try:
                saved = await self.credential_repository.add(credential)
                break
            except KeyStringCollisionError:
                credential_key_collisions_total.inc()
                logger.warning(
                    "Key string collision, regenerating",
                    extra={"attempt": attempt, "max_attempts": max_attempts},
                )
        if saved is None:
            raise DuplicateKeyError()

        await event_bus.publish(
            CredentialIssued(
                credential_id=saved.id,
                owner_identity_id=saved.owner_identity_id,
                product_id=saved.product_id,
            )
        )
        credentials_issued_total.inc()
        logger.info(
            "License key issued",
            extra={
                "credential_id": str(saved.id),
                "owner_identity_id": str(saved.owner_identity_id),
                "product_id": str(saved.product_id),
                "issued_by": str(command.caller.identity_id),
            },
        )

        return IssuedCredentialDTO(
            id=saved.id,
            key_string=saved.key_string,
            secret=secret,
            owner_identity_id=saved.owner_identity_id,
            product_id=saved.product_id,
            expires_at=saved.expires_at,
            created_at=saved.created_at,
        )

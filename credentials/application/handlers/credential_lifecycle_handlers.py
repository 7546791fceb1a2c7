"""
Credential lifecycle handlers.

Handles domain whitelist updates and revocation. Each writes only its
own fields, so a whitelist edit cannot undo a concurrent revoke, and
both retire cached validation snapshots before returning.
"""
import logging
import uuid
from datetime import datetime
from typing import Callable, Dict, Iterable

from core.domain.access import AccessPolicy
from core.domain.clock import utc_now
from core.domain.exceptions import CredentialNotFoundError
from core.domain.value_objects import DomainWhitelist
from core.infrastructure.events import event_bus
from core.metrics import credential_domains_updated_total, credentials_revoked_total
from credentials.application.commands.credential_lifecycle import (
    RevokeCredentialCommand,
    UpdateAllowedDomainsCommand,
)
from credentials.application.dto.credential_dto import CredentialDTO
from credentials.application.services.credential_cache_service import CredentialCacheService
from credentials.domain.credential import Credential
from credentials.domain.events import CredentialDomainsUpdated, CredentialRevoked
from credentials.ports.credential_repository import CredentialRepository
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


async def product_names(
    product_repository: ProductRepository, product_ids: Iterable[uuid.UUID]
) -> Dict[uuid.UUID, str]:
    products = await product_repository.list_by_ids(set(product_ids))
    return {product.id: product.name for product in products}


class _CredentialLifecycleHandler:
    """Shared lookup and response building."""

    def __init__(
        self,
        credential_repository: CredentialRepository,
        product_repository: ProductRepository,
        cache_service: CredentialCacheService,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize handler with repositories."""
        self.credential_repository = credential_repository
        self.product_repository = product_repository
        self.cache_service = cache_service
        self.clock = clock

    async def _get_credential(self, credential_id: uuid.UUID) -> Credential:
        credential = await self.credential_repository.find_by_id(credential_id)
        if credential is None:
            raise CredentialNotFoundError(f"License key {credential_id} not found")
        return credential

    async def _to_dto(self, credential: Credential, at: datetime) -> CredentialDTO:
        names = await product_names(self.product_repository, [credential.product_id])
        return CredentialDTO.from_entity(credential, names.get(credential.product_id, ""), at)


class UpdateAllowedDomainsHandler(_CredentialLifecycleHandler):
    """Handler for UpdateAllowedDomainsCommand."""

    async def handle(self, command: UpdateAllowedDomainsCommand) -> CredentialDTO:
        """
        Replace the whitelist.

        Raises:
            CredentialNotFoundError: If the credential does not exist
            ForbiddenError: If the caller is neither owner nor admin
            InvalidDomainError: If an entry is not a usable hostname
        """
        credential = await self._get_credential(command.credential_id)
        AccessPolicy.require_owner_or_admin(
            command.caller, credential.owner_identity_id, "update allowed domains"
        )

        whitelist = DomainWhitelist.from_iterable(command.allowed_domains)
        now = self.clock()
        updated = await self.credential_repository.update_allowed_domains(
            credential.id, whitelist, now
        )
        await self.cache_service.invalidate(updated.key_string)

        await event_bus.publish(
            CredentialDomainsUpdated(
                credential_id=updated.id,
                allowed_domains=tuple(whitelist.to_list()),
            )
        )
        credential_domains_updated_total.inc()
        logger.info(
            "Allowed domains updated",
            extra={
                "credential_id": str(updated.id),
                "domain_count": len(whitelist.domains),
                "updated_by": str(command.caller.identity_id),
            },
        )
        return await self._to_dto(updated, now)


class RevokeCredentialHandler(_CredentialLifecycleHandler):
    """Handler for RevokeCredentialCommand."""

    async def handle(self, command: RevokeCredentialCommand) -> CredentialDTO:
        """
        Revoke a credential. Revoking an already revoked key changes nothing.

        Raises:
            ForbiddenError: If the caller is not an admin
            CredentialNotFoundError: If the credential does not exist
        """
        AccessPolicy.require_admin(command.caller, "revoke license keys")
        credential = await self._get_credential(command.credential_id)
        now = self.clock()

        if credential.is_revoked:
            return await self._to_dto(credential, now)

        changed = await self.credential_repository.revoke(credential.id, now)
        await self.cache_service.invalidate(credential.key_string)
        revoked = await self._get_credential(credential.id)
        if not changed:
            return await self._to_dto(revoked, now)

        await event_bus.publish(CredentialRevoked(credential_id=revoked.id))
        credentials_revoked_total.inc()
        logger.info(
            "License key revoked",
            extra={
                "credential_id": str(revoked.id),
                "revoked_by": str(command.caller.identity_id),
            },
        )
        return await self._to_dto(revoked, now)

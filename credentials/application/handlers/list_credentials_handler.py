"""
ListCredentialsHandler.
"""
from datetime import datetime
from typing import Callable, List

from core.domain.access import AccessPolicy
from core.domain.clock import utc_now
from credentials.application.dto.credential_dto import CredentialDTO
from credentials.application.handlers.credential_lifecycle_handlers import product_names
from credentials.application.queries.list_credentials import ListCredentialsQuery
from credentials.ports.credential_repository import CredentialRepository
from products.ports.product_repository import ProductRepository


class ListCredentialsHandler:
    """Handler for ListCredentialsQuery."""

    def __init__(
        self,
        credential_repository: CredentialRepository,
        product_repository: ProductRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.credential_repository = credential_repository
        self.product_repository = product_repository
        self.clock = clock

    async def handle(self, query: ListCredentialsQuery) -> List[CredentialDTO]:
        if query.all_owners:
            AccessPolicy.require_admin(query.caller, "list every license key")
            credentials = await self.credential_repository.list_all()
        else:
            credentials = await self.credential_repository.list_by_owner(
                query.caller.identity_id
            )

        names = await product_names(
            self.product_repository, [credential.product_id for credential in credentials]
        )
        now = self.clock()
        return [
            CredentialDTO.from_entity(credential, names.get(credential.product_id, ""), now)
            for credential in credentials
        ]

"""
GetProfileHandler.
"""
from core.domain.exceptions import IdentityNotFoundError
from identities.application.dto.identity_dto import IdentityDTO
from identities.application.queries.get_profile import GetProfileQuery
from identities.ports.identity_repository import IdentityRepository


class GetProfileHandler:
    """Handler for GetProfileQuery."""

    def __init__(self, identity_repository: IdentityRepository):
        self.identity_repository = identity_repository

    async def handle(self, query: GetProfileQuery) -> IdentityDTO:
        identity = await self.identity_repository.find_by_id(query.caller.identity_id)
        if identity is None:
            raise IdentityNotFoundError()
        return IdentityDTO.from_entity(identity)

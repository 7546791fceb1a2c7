"""
ListProductsHandler.
"""
from typing import List

from core.domain.access import AccessPolicy
from credentials.ports.credential_repository import CredentialRepository
from products.application.dto.product_dto import ProductDTO
from products.application.queries.list_products import ListProductsQuery
from products.ports.product_repository import ProductRepository


class ListProductsHandler:
    """Handler for ListProductsQuery."""

    def __init__(
        self,
        product_repository: ProductRepository,
        credential_repository: CredentialRepository,
    ):
        self.product_repository = product_repository
        self.credential_repository = credential_repository

    async def handle(self, query: ListProductsQuery) -> List[ProductDTO]:
        owner_id = AccessPolicy.owner_scope(query.caller)
        if owner_id is None:
            products = await self.product_repository.list_all()
        else:
            product_ids = await self.credential_repository.product_ids_for_owner(owner_id)
            products = await self.product_repository.list_by_ids(product_ids) if product_ids else []
        return [ProductDTO.from_entity(product) for product in sorted(products, key=lambda p: p.name)]

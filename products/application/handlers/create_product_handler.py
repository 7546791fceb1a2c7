"""
CreateProductHandler.
"""
import logging

from core.domain.access import AccessPolicy
from core.domain.exceptions import InvalidFieldError, MissingFieldError, ProductSlugTakenError
from core.infrastructure.events import event_bus
from products.application.commands.create_product import CreateProductCommand
from products.application.dto.product_dto import ProductDTO
from products.domain.events import ProductCreated
from products.domain.product import Product
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CreateProductHandler:
    """Handler for CreateProductCommand."""

    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def handle(self, command: CreateProductCommand) -> ProductDTO:
        """
        Add a product to the catalog.

        Raises:
            ForbiddenError: If the caller is not an admin
            MissingFieldError: If name or slug is blank
            ProductSlugTakenError: If the slug is already used
        """
        AccessPolicy.require_admin(command.caller, "create products")
        if not (command.name or "").strip():
            raise MissingFieldError("name")
        if not (command.slug or "").strip():
            raise MissingFieldError("slug")

        try:
            product = Product.create(
                name=command.name, slug=command.slug, description=command.description
            )
        except ValueError as e:
            raise InvalidFieldError(str(e)) from e

        if await self.product_repository.find_by_slug(str(product.slug)):
            raise ProductSlugTakenError()
        saved = await self.product_repository.save(product)

        await event_bus.publish(ProductCreated(product_id=saved.id, slug=str(saved.slug)))
        logger.info("Product created", extra={"product_id": str(saved.id), "slug": str(saved.slug)})
        return ProductDTO.from_entity(saved)

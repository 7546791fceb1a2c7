"""
Product DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime

from products.domain.product import Product


@dataclass
class ProductDTO:
    """DTO for product information."""

    id: uuid.UUID
    name: str
    slug: str
    description: str
    created_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> "ProductDTO":
        return cls(
            id=product.id,
            name=product.name,
            slug=str(product.slug),
            description=product.description,
            created_at=product.created_at,
        )

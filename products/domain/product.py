"""
Product domain entity.

This is the core domain entity representing a product.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import ProductSlug


@dataclass(frozen=True)
class Product:
    """
    Product domain entity.

    Represents a product that license keys are issued for.
    """

    id: uuid.UUID
    name: str
    slug: ProductSlug
    description: str
    created_at: datetime

    def __post_init__(self):
        """Validate product entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Product name cannot be empty")
        if len(self.name) > 255:
            raise ValueError("Product name too long")

    @classmethod
    def create(
        cls,
        name: str,
        slug: str,
        description: str = "",
        product_id: Optional[uuid.UUID] = None,
    ) -> "Product":
        """
        Create a new Product entity.

        Args:
            name: Product display name
            slug: Product slug (URL-safe identifier)
            description: Free-form description
            product_id: Optional UUID (generated if not provided)

        Returns:
            Product entity instance
        """
        return cls(
            id=product_id or uuid.uuid4(),
            name=(name or "").strip(),
            slug=ProductSlug((slug or "").strip().lower()),
            description=description or "",
            created_at=datetime.now(timezone.utc),
        )

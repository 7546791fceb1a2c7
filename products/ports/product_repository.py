"""
Product repository port (interface).

This defines the contract for product persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from products.domain.product import Product


class ProductRepository(ABC):
    """Abstract repository for Product entities."""

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """
        Save a product entity.

        Raises:
            ProductSlugTakenError: If another product has the slug
        """

    @abstractmethod
    async def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        """Find a product by ID."""

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Product]:
        """Find a product by slug."""

    @abstractmethod
    async def list_all(self) -> List[Product]:
        """All products, ordered by name."""

    @abstractmethod
    async def list_by_ids(self, product_ids: Iterable[uuid.UUID]) -> List[Product]:
        """Products with the given IDs, ordered by name."""

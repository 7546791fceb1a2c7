"""
Product domain events.
"""
import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class ProductCreated(DomainEvent):
    """Event raised when an administrator adds a product."""

    product_id: uuid.UUID
    slug: str

    @property
    def aggregate_id(self) -> str:
        return str(self.product_id)

    def payload(self):
        return {"product_id": str(self.product_id), "slug": self.slug}

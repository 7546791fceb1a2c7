"""
Django implementation of ProductRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import Iterable, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import ProductSlugTakenError
from core.domain.value_objects import ProductSlug
from products.domain.product import Product
from products.infrastructure.models import Product as ProductModel
from products.ports.product_repository import ProductRepository


class DjangoProductRepository(ProductRepository):
    """Django ORM implementation of ProductRepository."""

    def _to_domain(self, model: ProductModel) -> Product:
        return Product(
            id=model.id,
            name=model.name,
            slug=ProductSlug(model.slug),
            description=model.description,
            created_at=model.created_at,
        )

    @sync_to_async
    def save(self, product: Product) -> Product:
        try:
            with transaction.atomic():
                model, _ = ProductModel.objects.update_or_create(
                    id=product.id,
                    defaults={
                        "name": product.name,
                        "slug": str(product.slug),
                        "description": product.description,
                        "created_at": product.created_at,
                    },
                )
        except IntegrityError as e:
            raise ProductSlugTakenError() from e
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        try:
            return self._to_domain(ProductModel.objects.get(id=product_id))
        except ProductModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_slug(self, slug: str) -> Optional[Product]:
        try:
            return self._to_domain(ProductModel.objects.get(slug=slug))
        except ProductModel.DoesNotExist:
            return None

    @sync_to_async
    def list_all(self) -> List[Product]:
        return [self._to_domain(model) for model in ProductModel.objects.all()]

    @sync_to_async
    def list_by_ids(self, product_ids: Iterable[uuid.UUID]) -> List[Product]:
        models = ProductModel.objects.filter(id__in=list(product_ids))
        return [self._to_domain(model) for model in models]

"""
Django implementation of IdentityRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import EmailAlreadyRegisteredError
from core.domain.value_objects import Email, Role
from identities.domain.identity import Identity
from identities.infrastructure.models import Identity as IdentityModel
from identities.ports.identity_repository import IdentityRepository


class DjangoIdentityRepository(IdentityRepository):
    """Django ORM implementation of IdentityRepository."""

    def _to_domain(self, model: IdentityModel) -> Identity:
        return Identity(
            id=model.id,
            email=Email(model.email),
            password_hash=model.password_hash,
            full_name=model.full_name,
            role=Role(model.role),
            created_at=model.created_at,
        )

    @sync_to_async
    def save(self, identity: Identity) -> Identity:
        """
        Save an identity entity.

        Updates never touch the role column.
        """
        try:
            with transaction.atomic():
                updated = IdentityModel.objects.filter(id=identity.id).update(
                    email=str(identity.email),
                    password_hash=identity.password_hash,
                    full_name=identity.full_name,
                )
                if updated:
                    model = IdentityModel.objects.get(id=identity.id)
                else:
                    model = IdentityModel.objects.create(
                        id=identity.id,
                        email=str(identity.email),
                        password_hash=identity.password_hash,
                        full_name=identity.full_name,
                        role=identity.role.value,
                        created_at=identity.created_at,
                    )
        except IntegrityError as e:
            raise EmailAlreadyRegisteredError() from e
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, identity_id: uuid.UUID) -> Optional[Identity]:
        try:
            return self._to_domain(IdentityModel.objects.get(id=identity_id))
        except IdentityModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_email(self, email: str) -> Optional[Identity]:
        try:
            return self._to_domain(IdentityModel.objects.get(email=email))
        except IdentityModel.DoesNotExist:
            return None

    @sync_to_async
    def count(self) -> int:
        return IdentityModel.objects.count()

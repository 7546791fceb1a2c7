"""
Django implementation of CredentialRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import List, Optional, Set

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Q

from core.domain.exceptions import CredentialNotFoundError, KeyStringCollisionError
from core.domain.value_objects import DomainWhitelist
from credentials.domain.credential import Credential, CredentialStatus
from credentials.infrastructure.models import Credential as CredentialModel
from credentials.ports.credential_repository import CredentialRepository


class DjangoCredentialRepository(CredentialRepository):
    """
    Django ORM implementation of CredentialRepository.

    Key string uniqueness is enforced by the database constraint, so
    concurrent issuers cannot both win the same key.
    """

    def _to_domain(self, model: CredentialModel) -> Credential:
        return Credential(
            id=model.id,
            key_string=model.key_string,
            secret_hash=model.secret_hash,
            owner_identity_id=model.owner_id,
            product_id=model.product_id,
            status=CredentialStatus(model.status),
            expires_at=model.expires_at,
            allowed_domains=DomainWhitelist(frozenset(model.allowed_domains or ())),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def add(self, credential: Credential) -> Credential:
        try:
            with transaction.atomic():
                model = CredentialModel.objects.create(
                    id=credential.id,
                    key_string=credential.key_string,
                    secret_hash=credential.secret_hash,
                    owner_id=credential.owner_identity_id,
                    product_id=credential.product_id,
                    status=credential.status.value,
                    expires_at=credential.expires_at,
                    allowed_domains=credential.allowed_domains.to_list(),
                    created_at=credential.created_at,
                    updated_at=credential.updated_at,
                )
        except IntegrityError as e:
            if CredentialModel.objects.filter(key_string=credential.key_string).exists():
                raise KeyStringCollisionError(credential.key_string) from e
            raise
        return self._to_domain(model)

    @sync_to_async
    def update_allowed_domains(
        self, credential_id: uuid.UUID, allowed_domains: DomainWhitelist, at: datetime
    ) -> Credential:
        with transaction.atomic():
            updated = CredentialModel.objects.filter(id=credential_id).update(
                allowed_domains=allowed_domains.to_list(),
                updated_at=at,
            )
            if not updated:
                raise CredentialNotFoundError()
            return self._to_domain(CredentialModel.objects.get(id=credential_id))

    @sync_to_async
    def revoke(self, credential_id: uuid.UUID, at: datetime) -> bool:
        updated = CredentialModel.objects.filter(
            id=credential_id, status=CredentialStatus.ACTIVE.value
        ).update(status=CredentialStatus.REVOKED.value, updated_at=at)
        if updated:
            return True
        if not CredentialModel.objects.filter(id=credential_id).exists():
            raise CredentialNotFoundError()
        return False

    @sync_to_async
    def find_by_id(self, credential_id: uuid.UUID) -> Optional[Credential]:
        try:
            return self._to_domain(CredentialModel.objects.get(id=credential_id))
        except CredentialModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_key_string(self, key_string: str) -> Optional[Credential]:
        try:
            return self._to_domain(CredentialModel.objects.get(key_string=key_string))
        except CredentialModel.DoesNotExist:
            return None

    @sync_to_async
    def list_by_owner(self, owner_identity_id: uuid.UUID) -> List[Credential]:
        models = CredentialModel.objects.filter(owner_id=owner_identity_id)
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_all(self) -> List[Credential]:
        return [self._to_domain(model) for model in CredentialModel.objects.all()]

    @sync_to_async
    def product_ids_for_owner(self, owner_identity_id: uuid.UUID) -> Set[uuid.UUID]:
        return set(
            CredentialModel.objects.filter(owner_id=owner_identity_id)
            .order_by()
            .values_list("product_id", flat=True)
            .distinct()
        )

    @sync_to_async
    def count_active(self, at: datetime) -> int:
        return (
            CredentialModel.objects.filter(status=CredentialStatus.ACTIVE.value)
            .filter(Q(expires_at__isnull=True) | Q(expires_at__gt=at))
            .count()
        )

"""
Django implementation of ValidationEventRepository port.
"""
import logging
from datetime import datetime
from typing import List

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, transaction

from core.domain.exceptions import InfrastructureError
from validations.domain.validation_event import (
    ValidationErrorCode,
    ValidationEvent,
    ValidationResult,
)
from validations.infrastructure.models import ValidationEvent as ValidationEventModel
from validations.ports.validation_event_repository import ValidationEventRepository

logger = logging.getLogger(__name__)


class DjangoValidationEventRepository(ValidationEventRepository):
    """Django ORM implementation of ValidationEventRepository."""

    def _to_domain(self, model: ValidationEventModel) -> ValidationEvent:
        return ValidationEvent(
            id=model.id,
            credential_id=model.credential_id,
            api_key=model.api_key,
            ip_address=model.ip_address,
            domain=model.domain,
            result=ValidationResult(model.result),
            error_code=ValidationErrorCode(model.error_code),
            timestamp=model.timestamp,
        )

    def append_sync(self, event: ValidationEvent) -> ValidationEvent:
        """
        Insert the event. Re-inserting an id that already exists is a no-op,
        so retried writes stay exactly-once.
        """
        try:
            if ValidationEventModel.objects.filter(id=event.id).exists():
                return event
            with transaction.atomic():
                ValidationEventModel(
                    id=event.id,
                    credential_id=event.credential_id,
                    api_key=event.api_key,
                    ip_address=event.ip_address,
                    domain=event.domain,
                    result=event.result.value,
                    error_code=event.error_code.value,
                    timestamp=event.timestamp,
                ).save(force_insert=True)
        except IntegrityError as e:
            if ValidationEventModel.objects.filter(id=event.id).exists():
                return event
            raise InfrastructureError(f"Could not store validation event: {e}") from e
        except DatabaseError as e:
            raise InfrastructureError(f"Could not store validation event: {e}") from e
        return event

    async def append(self, event: ValidationEvent) -> ValidationEvent:
        return await sync_to_async(self.append_sync)(event)

    @sync_to_async
    def list_recent(self, limit: int) -> List[ValidationEvent]:
        models = ValidationEventModel.objects.order_by("-timestamp", "-id")[:limit]
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def count_since(self, since: datetime) -> int:
        return ValidationEventModel.objects.filter(timestamp__gte=since).count()

    @sync_to_async
    def count(self) -> int:
        return ValidationEventModel.objects.count()

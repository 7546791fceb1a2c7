"""
Celery tasks for background processing.

Retries audit writes that failed on the validation request path.
"""
import logging

from LicenseKeyService.celery import app

from core.domain.exceptions import InfrastructureError

logger = logging.getLogger(__name__)

AUDIT_RETRY_MAX_ATTEMPTS = 5


@app.task(bind=True, max_retries=AUDIT_RETRY_MAX_ATTEMPTS)
def persist_validation_event_task(self, event_data: dict):
    """
    Store a validation event that could not be written inline.

    Args:
        event_data: ``ValidationEvent.to_dict()`` output
    """
    from validations.domain.validation_event import ValidationEvent
    from validations.infrastructure.repositories.django_validation_event_repository import (
        DjangoValidationEventRepository,
    )

    event = ValidationEvent.from_dict(event_data)
    try:
        DjangoValidationEventRepository().append_sync(event)
    except InfrastructureError as exc:
        logger.warning(
            "Validation event retry failed",
            extra={"event_id": event_data.get("id"), "attempt": self.request.retries + 1},
        )
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)

    logger.info("Validation event stored on retry", extra={"event_id": event_data.get("id")})


def schedule_validation_event_retry(event_data: dict) -> None:
    """Hand a failed audit write to the worker; fails fast if the broker is down."""
    persist_validation_event_task.apply_async(args=[event_data], retry=False)

"""
Audit trail for validation attempts.

Writes are attempted inline; a store failure is logged, counted and
handed to a Celery retry task. Recording never raises into the
validation path.
"""
import logging
from typing import Callable, Optional

from asgiref.sync import sync_to_async

from core.domain.exceptions import InfrastructureError
from core.metrics import audit_events_dropped_total, audit_persist_failures_total
from validations.domain.validation_event import ValidationEvent
from validations.ports.validation_event_repository import ValidationEventRepository

logger = logging.getLogger(__name__)


def _default_retry_scheduler(event_data: dict) -> None:
    from core.tasks import schedule_validation_event_retry

    schedule_validation_event_retry(event_data)


class AuditTrail:
    """Best-effort append of ValidationEvents."""

    def __init__(
        self,
        repository: ValidationEventRepository,
        retry_scheduler: Optional[Callable[[dict], None]] = None,
    ):
        self.repository = repository
        self.retry_scheduler = retry_scheduler or _default_retry_scheduler

    async def record(self, event: ValidationEvent) -> bool:
        """
        Store ``event``.

        Returns:
            True if written inline, False if handed to the retry task
        """
        try:
            await self.repository.append(event)
            return True
        except InfrastructureError as e:
            audit_persist_failures_total.inc()
            logger.error(
                "Validation event not stored, scheduling retry: %s",
                e,
                extra={"event_id": str(event.id)},
            )

        try:
            await sync_to_async(self.retry_scheduler)(event.to_dict())
        except Exception as e:  # pylint: disable=broad-exception-caught
            audit_events_dropped_total.inc()
            logger.error(
                "Could not schedule validation event retry: %s",
                e,
                extra={"event_id": str(event.id)},
                exc_info=True,
            )
        return False

"""
ValidateCredentialHandler.

The hot path: one credential lookup, the ordered checks, one audit
record and one security log event per call.
"""
import logging
import time
from datetime import datetime
from typing import Callable, Optional

from core.domain.clock import utc_now
from core.infrastructure.events import event_bus
from core.metrics import validation_duration_seconds, validations_total
from credentials.application.services.credential_cache_service import CredentialCacheService
from credentials.domain.credential import Credential
from credentials.ports.credential_repository import CredentialRepository
from validations.application.commands.validate_credential import ValidateCredentialCommand
from validations.application.dto.validation_dto import ValidationResultDTO
from validations.application.services.audit_trail import AuditTrail
from validations.domain.events import ValidationRecorded
from validations.domain.services import CredentialValidator
from validations.domain.validation_event import ValidationEvent

logger = logging.getLogger(__name__)


class ValidateCredentialHandler:
    """Handler for ValidateCredentialCommand."""

    def __init__(
        self,
        credential_repository: CredentialRepository,
        audit_trail: AuditTrail,
        cache_service: CredentialCacheService,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.credential_repository = credential_repository
        self.audit_trail = audit_trail
        self.cache_service = cache_service
        self.clock = clock

    async def _lookup(self, api_key: str) -> Optional[Credential]:
        if not api_key:
            return None
        return await self.cache_service.get_or_load(
            api_key, self.credential_repository.find_by_key_string
        )

    async def handle(self, command: ValidateCredentialCommand) -> ValidationResultDTO:
        """
        Validate a presented key.

        Returns:
            ValidationResultDTO; denials are results, not errors
        """
        started = time.perf_counter()
        api_key = (command.api_key or "").strip()
        domain = (command.domain or "").strip()

        now = self.clock()
        credential = await self._lookup(api_key)
        decision = CredentialValidator.evaluate(credential, command.secret or "", domain, now)

        event = ValidationEvent.record(
            decision,
            api_key=api_key,
            domain=domain,
            ip_address=(command.client_ip or "").strip(),
            at=now,
        )
        await self.audit_trail.record(event)
        await event_bus.publish(ValidationRecorded(validation_event=event))

        validations_total.labels(
            result=decision.result.value, error_code=decision.error_code.value
        ).inc()
        validation_duration_seconds.observe(time.perf_counter() - started)
        logger.info(
            "License key validated",
            extra={
                "credential_id": str(decision.credential_id) if decision.credential_id else None,
                "result": decision.result.value,
                "error_code": decision.error_code.value,
                "domain": event.domain,
                "client_ip": event.ip_address,
            },
        )
        return ValidationResultDTO(valid=decision.is_valid, error_code=decision.error_code.value)

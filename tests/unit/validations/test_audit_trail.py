"""
Unit tests for AuditTrail.
"""
import pytest

from conftest import FIXED_NOW
from fakes import InMemoryValidationEventRepository, RecordingScheduler
from validations.application.services.audit_trail import AuditTrail
from validations.domain.validation_event import (
    ValidationDecision,
    ValidationErrorCode,
    ValidationEvent,
)


@pytest.fixture
def event():
    return ValidationEvent.record(
        ValidationDecision(ValidationErrorCode.NOT_FOUND),
        api_key="LK-NOPE",
        domain="example.com",
        ip_address="198.51.100.1",
        at=FIXED_NOW,
    )


@pytest.mark.asyncio
class TestAuditTrail:
    async def test_writes_inline(self, event):
        repository = InMemoryValidationEventRepository()
        scheduler = RecordingScheduler()

        assert await AuditTrail(repository, retry_scheduler=scheduler).record(event) is True
        assert repository.items == [event]
        assert scheduler.calls == []

    async def test_store_failure_is_handed_to_retry(self, event):
        scheduler = RecordingScheduler()
        trail = AuditTrail(InMemoryValidationEventRepository(fail=True), retry_scheduler=scheduler)

        assert await trail.record(event) is False
        assert scheduler.calls == [event.to_dict()]

    async def test_scheduler_failure_is_swallowed(self, event):
        trail = AuditTrail(
            InMemoryValidationEventRepository(fail=True),
            retry_scheduler=RecordingScheduler(fail=True),
        )

        assert await trail.record(event) is False

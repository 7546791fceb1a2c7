"""
Validation DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from validations.domain.validation_event import ValidationEvent
from validations.infrastructure.security_log_broadcaster import MonitoringSession


@dataclass
class ValidationResultDTO:
    """Answer returned to the validating client."""

    valid: bool
    error_code: str


@dataclass
class ValidationEventDTO:
    """Security log entry."""

    id: uuid.UUID
    credential_id: Optional[uuid.UUID]
    api_key: str
    ip_address: str
    domain: str
    result: str
    error_code: str
    timestamp: datetime

    @classmethod
    def from_entity(cls, event: ValidationEvent) -> "ValidationEventDTO":
        return cls(
            id=event.id,
            credential_id=event.credential_id,
            api_key=event.api_key,
            ip_address=event.ip_address,
            domain=event.domain,
            result=event.result.value,
            error_code=event.error_code.value,
            timestamp=event.timestamp,
        )


@dataclass
class DashboardStatsDTO:
    """Admin dashboard counters. Billing is out of scope, so paid_orders is 0."""

    total_users: int
    active_api_keys: int
    paid_orders: int
    validations_today: int


@dataclass
class SecurityLogSubscription:
    """
    A live monitoring session plus its initial snapshot.

    ``snapshot`` is newest first; events arriving on ``session`` after it
    are delivered oldest first and never repeat a snapshot entry.
    """

    session: MonitoringSession
    snapshot: List[ValidationEventDTO]

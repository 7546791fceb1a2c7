"""
Validation outcome types and the ValidationEvent audit record.

Outcomes are data: a failed validation is a normal return value, never
an exception.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

MAX_RECORDED_DOMAIN_LENGTH = 253
MAX_RECORDED_KEY_LENGTH = 100
MAX_RECORDED_IP_LENGTH = 64


class ValidationResult(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


class ValidationErrorCode(str, Enum):
    """Outcome of the ordered validation checks."""

    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    REVOKED = "REVOKED"
    EXPIRED = "EXPIRED"
    DOMAIN_NOT_ALLOWED = "DOMAIN_NOT_ALLOWED"
    BAD_SIGNATURE = "BAD_SIGNATURE"


@dataclass(frozen=True)
class ValidationDecision:
    """Result of evaluating one validation request."""

    error_code: ValidationErrorCode
    credential_id: Optional[uuid.UUID] = None

    @property
    def result(self) -> ValidationResult:
        if self.error_code == ValidationErrorCode.OK:
            return ValidationResult.ALLOW
        return ValidationResult.DENY

    @property
    def is_valid(self) -> bool:
        return self.result == ValidationResult.ALLOW


@dataclass(frozen=True)
class ValidationEvent:
    """
    Immutable audit record of one validation attempt.

    ``credential_id`` is None when the presented key matched nothing.
    """

    id: uuid.UUID
    credential_id: Optional[uuid.UUID]
    api_key: str
    ip_address: str
    domain: str
    result: ValidationResult
    error_code: ValidationErrorCode
    timestamp: datetime

    @classmethod
    def record(
        cls,
        decision: ValidationDecision,
        api_key: str,
        domain: str,
        ip_address: str,
        at: datetime,
    ) -> "ValidationEvent":
        """Build the event for a decision, clipping client-supplied strings."""
        return cls(
            id=uuid.uuid4(),
            credential_id=decision.credential_id,
            api_key=(api_key or "")[:MAX_RECORDED_KEY_LENGTH],
            ip_address=(ip_address or "")[:MAX_RECORDED_IP_LENGTH],
            domain=(domain or "")[:MAX_RECORDED_DOMAIN_LENGTH],
            result=decision.result,
            error_code=decision.error_code,
            timestamp=at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "credential_id": str(self.credential_id) if self.credential_id else None,
            "api_key": self.api_key,
            "ip_address": self.ip_address,
            "domain": self.domain,
            "result": self.result.value,
            "error_code": self.error_code.value,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationEvent":
        return cls(
            id=uuid.UUID(data["id"]),
            credential_id=uuid.UUID(data["credential_id"]) if data.get("credential_id") else None,
            api_key=data.get("api_key", ""),
            ip_address=data.get("ip_address", ""),
            domain=data.get("domain", ""),
            result=ValidationResult(data["result"]),
            error_code=ValidationErrorCode(data["error_code"]),
            timestamp=datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00")),
        )

"""
Credential validation decision procedure.
"""
from datetime import datetime
from typing import Optional

from credentials.domain.credential import Credential
from validations.domain.validation_event import ValidationDecision, ValidationErrorCode


class CredentialValidator:
    """
    Ordered validation checks.

    Each check short-circuits with its own error code: existence,
    revocation, expiry, domain whitelist, then the secret. The
    credential is only read, never changed.
    """

    @staticmethod
    def evaluate(
        credential: Optional[Credential],
        presented_secret: str,
        domain: str,
        at: datetime,
    ) -> ValidationDecision:
        if credential is None:
            return ValidationDecision(ValidationErrorCode.NOT_FOUND)

        if credential.is_revoked:
            code = ValidationErrorCode.REVOKED
        elif credential.is_expired(at):
            code = ValidationErrorCode.EXPIRED
        elif not credential.allowed_domains.allows(domain):
            code = ValidationErrorCode.DOMAIN_NOT_ALLOWED
        elif not credential.verify_secret(presented_secret):
            code = ValidationErrorCode.BAD_SIGNATURE
        else:
            code = ValidationErrorCode.OK
        return ValidationDecision(code, credential_id=credential.id)

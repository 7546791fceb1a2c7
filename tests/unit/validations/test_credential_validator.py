"""
Unit tests for the ordered validation checks.
"""
from datetime import timedelta

import pytest

from conftest import FIXED_NOW
from validations.domain.services import CredentialValidator
from validations.domain.validation_event import ValidationErrorCode, ValidationResult


class TestCredentialValidator:
    """Each check short-circuits with its own code."""

    def test_unknown_key(self):
        decision = CredentialValidator.evaluate(None, "secret", "example.com", FIXED_NOW)
        assert decision.error_code == ValidationErrorCode.NOT_FOUND
        assert decision.result == ValidationResult.DENY
        assert decision.credential_id is None

    def test_ok(self, make_credential):
        credential, secret = make_credential(allowed_domains=["example.com"])
        decision = CredentialValidator.evaluate(credential, secret, "Example.com", FIXED_NOW)
        assert decision.error_code == ValidationErrorCode.OK
        assert decision.is_valid
        assert decision.credential_id == credential.id

    def test_empty_whitelist_allows_any_domain(self, make_credential):
        credential, secret = make_credential()
        decision = CredentialValidator.evaluate(credential, secret, "whatever.test", FIXED_NOW)
        assert decision.is_valid

    def test_revoked_wins_over_everything_after_it(self, make_credential):
        credential, _ = make_credential(
            status="revoked", expires_at=FIXED_NOW - timedelta(days=1), allowed_domains=["a.com"]
        )
        decision = CredentialValidator.evaluate(credential, "wrong", "b.com", FIXED_NOW)
        assert decision.error_code == ValidationErrorCode.REVOKED

    def test_expired_regardless_of_domain_and_secret(self, make_credential):
        credential, _ = make_credential(
            expires_at=FIXED_NOW - timedelta(seconds=1), allowed_domains=["a.com"]
        )
        decision = CredentialValidator.evaluate(credential, "wrong", "b.com", FIXED_NOW)
        assert decision.error_code == ValidationErrorCode.EXPIRED

    def test_expiry_instant_is_already_expired(self, make_credential):
        credential, secret = make_credential(expires_at=FIXED_NOW)
        decision = CredentialValidator.evaluate(credential, secret, "", FIXED_NOW)
        assert decision.error_code == ValidationErrorCode.EXPIRED

    def test_domain_not_allowed_before_secret(self, make_credential):
        credential, _ = make_credential(allowed_domains=["example.com"])
        decision = CredentialValidator.evaluate(credential, "wrong", "other.com", FIXED_NOW)
        assert decision.error_code == ValidationErrorCode.DOMAIN_NOT_ALLOWED

    @pytest.mark.parametrize("presented", ["wrong", ""])
    def test_bad_signature(self, make_credential, presented):
        credential, _ = make_credential()
        decision = CredentialValidator.evaluate(credential, presented, "example.com", FIXED_NOW)
        assert decision.error_code == ValidationErrorCode.BAD_SIGNATURE

    def test_evaluation_does_not_change_the_credential(self, make_credential):
        credential, secret = make_credential(allowed_domains=["example.com"])
        before = credential
        CredentialValidator.evaluate(credential, secret, "example.com", FIXED_NOW)
        CredentialValidator.evaluate(credential, "wrong", "other.com", FIXED_NOW)
        assert credential == before

"""
Unit tests for caller context and access scoping.
"""
import uuid

import pytest

from core.domain.access import AccessPolicy, CallerContext
from core.domain.exceptions import ForbiddenError
from core.domain.value_objects import Role


@pytest.fixture
def admin():
    return CallerContext(identity_id=uuid.uuid4(), role=Role.ADMIN)


@pytest.fixture
def customer():
    return CallerContext(identity_id=uuid.uuid4(), role=Role.CUSTOMER)


class TestAccessPolicy:
    def test_require_admin(self, admin, customer):
        AccessPolicy.require_admin(admin, "issue license keys")
        with pytest.raises(ForbiddenError, match="issue license keys"):
            AccessPolicy.require_admin(customer, "issue license keys")

    def test_owner_or_admin(self, admin, customer):
        AccessPolicy.require_owner_or_admin(customer, customer.identity_id, "edit domains")
        AccessPolicy.require_owner_or_admin(admin, customer.identity_id, "edit domains")
        with pytest.raises(ForbiddenError):
            AccessPolicy.require_owner_or_admin(customer, uuid.uuid4(), "edit domains")

    def test_owner_scope(self, admin, customer):
        assert AccessPolicy.owner_scope(admin) is None
        assert AccessPolicy.owner_scope(customer) == customer.identity_id

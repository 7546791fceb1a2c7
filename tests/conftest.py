"""
Pytest configuration and shared fixtures.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from asgiref.sync import async_to_sync

from core.domain.access import CallerContext
from core.domain.value_objects import DomainWhitelist, Role
from credentials.application.services.credential_cache_service import CredentialCacheService
from credentials.domain.credential import Credential
from credentials.domain.services import generate_key_string, generate_secret, hash_secret
from fakes import (
    InMemoryAuthTokenRepository,
    InMemoryCache,
    InMemoryCredentialRepository,
    InMemoryIdentityRepository,
    InMemoryProductRepository,
    InMemoryValidationEventRepository,
)
from identities.domain.identity import Identity
from identities.domain.services import hash_password
from products.domain.product import Product

FIXED_NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)
ADMIN_PASSWORD = "Admin123!"
CUSTOMER_PASSWORD = "Customer123!"


class FrozenClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FrozenClock()


# In-memory ports


@pytest.fixture
def identity_repository():
    return InMemoryIdentityRepository()


@pytest.fixture
def auth_token_repository():
    return InMemoryAuthTokenRepository()


@pytest.fixture
def product_repository():
    return InMemoryProductRepository()


@pytest.fixture
def credential_repository():
    return InMemoryCredentialRepository()


@pytest.fixture
def validation_event_repository():
    return InMemoryValidationEventRepository()


@pytest.fixture
def cache():
    return InMemoryCache()


@pytest.fixture
def cache_service(cache):
    """Cache service with caching enabled against the in-memory cache."""
    return CredentialCacheService(cache=cache, ttl_seconds=30)


@pytest.fixture
def admin(identity_repository):
    return identity_repository.put(
        Identity.create(email="admin@example.com", password_hash="x", role=Role.ADMIN)
    )


@pytest.fixture
def customer(identity_repository):
    return identity_repository.put(
        Identity.create(email="alice@example.com", password_hash="x", full_name="Alice")
    )


@pytest.fixture
def other_customer(identity_repository):
    return identity_repository.put(Identity.create(email="bob@example.com", password_hash="x"))


@pytest.fixture
def admin_caller(admin):
    return CallerContext(identity_id=admin.id, role=Role.ADMIN, email=str(admin.email))


@pytest.fixture
def customer_caller(customer):
    return CallerContext(identity_id=customer.id, role=Role.CUSTOMER, email=str(customer.email))


@pytest.fixture
def product(product_repository):
    return product_repository.put(Product.create(name="Rank Pro", slug="rank-pro"))


@pytest.fixture
def make_credential(credential_repository, customer, product):
    """Factory storing a credential and returning ``(credential, secret)``."""

    def _make(owner=None, expires_at=None, status=None, allowed_domains=None):
        secret = generate_secret()
        credential = Credential.create(
            owner_identity_id=(owner or customer).id,
            product_id=product.id,
            key_string=generate_key_string("LK"),
            secret_hash=hash_secret(secret),
            expires_at=expires_at,
            now=FIXED_NOW,
        )
        if allowed_domains is not None:
            credential = credential.with_allowed_domains(
                DomainWhitelist.from_iterable(allowed_domains), FIXED_NOW
            )
        if status == "revoked":
            credential = credential.revoke(FIXED_NOW)
        return credential_repository.put(credential), secret

    return _make


# Database-backed fixtures for integration tests


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


def _register(email: str, password: str, role: Role, full_name: str = ""):
    from identities.application.commands.register_identity import RegisterIdentityCommand
    from identities.application.handlers.register_identity_handler import (
        RegisterIdentityHandler,
    )
    from identities.infrastructure.repositories.django_identity_repository import (
        DjangoIdentityRepository,
    )

    handler = RegisterIdentityHandler(identity_repository=DjangoIdentityRepository())
    command = RegisterIdentityCommand(email=email, password=password, full_name=full_name)
    return async_to_sync(handler.handle)(command, role=role)


def _login(email: str, password: str) -> str:
    from identities.application.commands.login import LoginCommand
    from identities.application.handlers.login_handler import LoginHandler
    from identities.infrastructure.repositories.django_auth_token_repository import (
        DjangoAuthTokenRepository,
    )
    from identities.infrastructure.repositories.django_identity_repository import (
        DjangoIdentityRepository,
    )

    handler = LoginHandler(
        identity_repository=DjangoIdentityRepository(),
        auth_token_repository=DjangoAuthTokenRepository(),
    )
    return async_to_sync(handler.handle)(LoginCommand(email=email, password=password)).token


@pytest.fixture
def db_admin(db):
    """Admin identity saved in the database."""
    return _register("admin@example.com", ADMIN_PASSWORD, Role.ADMIN, "Admin")


@pytest.fixture
def db_customer(db):
    """Customer identity saved in the database."""
    return _register("alice@example.com", CUSTOMER_PASSWORD, Role.CUSTOMER, "Alice")


@pytest.fixture
def db_other_customer(db):
    return _register("bob@example.com", CUSTOMER_PASSWORD, Role.CUSTOMER, "Bob")


@pytest.fixture
def admin_client(db_admin):
    from rest_framework.test import APIClient

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {_login('admin@example.com', ADMIN_PASSWORD)}")
    return client


@pytest.fixture
def customer_client(db_customer):
    from rest_framework.test import APIClient

    client = APIClient()
    client.credentials(
        HTTP_AUTHORIZATION=f"Bearer {_login('alice@example.com', CUSTOMER_PASSWORD)}"
    )
    return client


@pytest.fixture
def other_customer_client(db_other_customer):
    from rest_framework.test import APIClient

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {_login('bob@example.com', CUSTOMER_PASSWORD)}")
    return client


@pytest.fixture
def db_product(db):
    """Product saved in the database."""
    from products.infrastructure.repositories.django_product_repository import (
        DjangoProductRepository,
    )

    product = Product.create(name="Rank Pro", slug=f"rank-pro-{uuid.uuid4().hex[:6]}")
    return async_to_sync(DjangoProductRepository().save)(product)


@pytest.fixture
def issue_key(admin_client, db_customer, db_product):
    """Issue a key for the customer through the API and return the response body."""

    def _issue(ttl_days=30, owner=None):
        response = admin_client.post(
            "/admin/create-apikey",
            {
                "user_id": str((owner or db_customer).id),
                "product_id": str(db_product.id),
                "ttl_days": ttl_days,
            },
            format="json",
        )
        assert response.status_code == 201, response.content
        return response.json()

    return _issue

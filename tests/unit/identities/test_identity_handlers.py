"""
Unit tests for registration, login and logout.
"""
from datetime import timedelta

import pytest

from conftest import FIXED_NOW
from core.domain.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidFieldError,
    InvalidLoginError,
    MissingFieldError,
)
from core.domain.value_objects import Role
from identities.application.commands.login import LoginCommand, LogoutCommand
from identities.application.commands.register_identity import RegisterIdentityCommand
from identities.application.handlers.login_handler import LoginHandler, LogoutHandler
from identities.application.handlers.register_identity_handler import RegisterIdentityHandler
from identities.domain.services import hash_token


@pytest.fixture
def register(identity_repository):
    async def _register(email="carol@example.com", password="s3cret-pass", role=Role.CUSTOMER):
        handler = RegisterIdentityHandler(identity_repository=identity_repository)
        return await handler.handle(
            RegisterIdentityCommand(email=email, password=password, full_name=" Carol "),
            role=role,
        )

    return _register


@pytest.mark.asyncio
class TestRegisterIdentityHandler:
    async def test_registers_customer(self, register, identity_repository):
        result = await register(email="  Carol@Example.com ")

        assert result.role == "customer"
        assert result.email == "carol@example.com"
        assert result.full_name == "Carol"
        stored = await identity_repository.find_by_id(result.id)
        assert stored.password_hash != "s3cret-pass"
        assert stored.check_password("s3cret-pass")

    async def test_operator_may_create_admin(self, register):
        result = await register(role=Role.ADMIN)
        assert result.role == "admin"

    async def test_duplicate_email(self, register):
        await register()
        with pytest.raises(EmailAlreadyRegisteredError):
            await register(email="CAROL@example.com")

    @pytest.mark.parametrize(
        "email,password,error",
        [
            ("", "s3cret-pass", MissingFieldError),
            ("carol@example.com", "", MissingFieldError),
            ("carol@example.com", "short", InvalidFieldError),
            ("not-an-email", "s3cret-pass", InvalidFieldError),
        ],
    )
    async def test_rejects_bad_input(self, register, email, password, error):
        with pytest.raises(error):
            await register(email=email, password=password)


@pytest.mark.asyncio
class TestLoginAndLogout:
    async def test_login_issues_expiring_token(
        self, register, identity_repository, auth_token_repository, clock
    ):
        await register()
        handler = LoginHandler(identity_repository, auth_token_repository, clock=clock)

        result = await handler.handle(
            LoginCommand(email="carol@example.com", password="s3cret-pass")
        )

        stored = await auth_token_repository.find_by_hash(hash_token(result.token))
        assert stored.is_active(FIXED_NOW)
        assert result.expires_at == FIXED_NOW + timedelta(hours=24)
        assert not stored.is_active(result.expires_at)
        assert result.user.email == "carol@example.com"

    @pytest.mark.parametrize(
        "email,password",
        [("carol@example.com", "wrong-pass"), ("nobody@example.com", "s3cret-pass")],
    )
    async def test_wrong_credentials(
        self, register, identity_repository, auth_token_repository, email, password
    ):
        await register()
        handler = LoginHandler(identity_repository, auth_token_repository)
        with pytest.raises(InvalidLoginError):
            await handler.handle(LoginCommand(email=email, password=password))

    async def test_logout_revokes_token(
        self, register, identity_repository, auth_token_repository, clock
    ):
        await register()
        login = await LoginHandler(identity_repository, auth_token_repository, clock=clock).handle(
            LoginCommand(email="carol@example.com", password="s3cret-pass")
        )
        logout = LogoutHandler(auth_token_repository, clock=clock)

        await logout.handle(LogoutCommand(raw_token=login.token))
        await logout.handle(LogoutCommand(raw_token=login.token))
        await logout.handle(LogoutCommand(raw_token="never-issued"))

        stored = await auth_token_repository.find_by_hash(hash_token(login.token))
        assert not stored.is_active(FIXED_NOW)

"""
Django implementation of AuthTokenRepository port.
"""
from typing import Optional

from asgiref.sync import sync_to_async

from identities.domain.auth_token import AuthToken
from identities.infrastructure.models import AuthToken as AuthTokenModel
from identities.ports.auth_token_repository import AuthTokenRepository


class DjangoAuthTokenRepository(AuthTokenRepository):
    """Django ORM implementation of AuthTokenRepository."""

    def _to_domain(self, model: AuthTokenModel) -> AuthToken:
        return AuthToken(
            id=model.id,
            identity_id=model.identity_id,
            token_hash=model.token_hash,
            created_at=model.created_at,
            expires_at=model.expires_at,
            revoked_at=model.revoked_at,
        )

    @sync_to_async
    def save(self, token: AuthToken) -> AuthToken:
        model, _ = AuthTokenModel.objects.update_or_create(
            id=token.id,
            defaults={
                "identity_id": token.identity_id,
                "token_hash": token.token_hash,
                "created_at": token.created_at,
                "expires_at": token.expires_at,
                "revoked_at": token.revoked_at,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_hash(self, token_hash: str) -> Optional[AuthToken]:
        try:
            return self._to_domain(AuthTokenModel.objects.get(token_hash=token_hash))
        except AuthTokenModel.DoesNotExist:
            return None

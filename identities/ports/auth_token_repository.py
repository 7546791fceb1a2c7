"""
AuthToken repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Optional

from identities.domain.auth_token import AuthToken


class AuthTokenRepository(ABC):
    """Abstract repository for bearer tokens."""

    @abstractmethod
    async def save(self, token: AuthToken) -> AuthToken:
        """Insert or update a token."""

    @abstractmethod
    async def find_by_hash(self, token_hash: str) -> Optional[AuthToken]:
        """Find a token by its sha256 hash, active or not."""

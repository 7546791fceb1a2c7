"""
Credential repository port (interface).

This defines the contract for credential persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Set

from core.domain.value_objects import DomainWhitelist
from credentials.domain.credential import Credential


class CredentialRepository(ABC):
    """
    Abstract repository for Credential entities.

    Credentials are inserted once and afterwards only have their status
    and whitelist updated; nothing deletes them.
    """

    @abstractmethod
    async def add(self, credential: Credential) -> Credential:
        """
        Insert a new credential.

        Raises:
            KeyStringCollisionError: If the key string is already taken
        """

    @abstractmethod
    async def update_allowed_domains(
        self, credential_id: uuid.UUID, allowed_domains: DomainWhitelist, at: datetime
    ) -> Credential:
        """
        Replace the whitelist, leaving status untouched.

        Returns:
            The credential as stored after the update

        Raises:
            CredentialNotFoundError: If the credential does not exist
        """

    @abstractmethod
    async def revoke(self, credential_id: uuid.UUID, at: datetime) -> bool:
        """
        Mark an active credential revoked.

        Returns:
            True if this call revoked it, False if it already was

        Raises:
            CredentialNotFoundError: If the credential does not exist
        """

    @abstractmethod
    async def find_by_id(self, credential_id: uuid.UUID) -> Optional[Credential]:
        """Find a credential by ID."""

    @abstractmethod
    async def find_by_key_string(self, key_string: str) -> Optional[Credential]:
        """Point lookup by public key string."""

    @abstractmethod
    async def list_by_owner(self, owner_identity_id: uuid.UUID) -> List[Credential]:
        """Credentials owned by an identity, newest first."""

    @abstractmethod
    async def list_all(self) -> List[Credential]:
        """All credentials, newest first."""

    @abstractmethod
    async def product_ids_for_owner(self, owner_identity_id: uuid.UUID) -> Set[uuid.UUID]:
        """Products referenced by an identity's credentials."""

    @abstractmethod
    async def count_active(self, at: datetime) -> int:
        """Credentials that are not revoked and not expired at ``at``."""

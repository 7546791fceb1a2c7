"""
Identity repository port (interface).

This defines the contract for identity persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from identities.domain.identity import Identity


class IdentityRepository(ABC):
    """Abstract repository for Identity entities."""

    @abstractmethod
    async def save(self, identity: Identity) -> Identity:
        """
        Save an identity entity.

        Raises:
            EmailAlreadyRegisteredError: If another identity has the email
        """

    @abstractmethod
    async def find_by_id(self, identity_id: uuid.UUID) -> Optional[Identity]:
        """Find an identity by ID."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Identity]:
        """Find an identity by (normalized) email."""

    @abstractmethod
    async def count(self) -> int:
        """Total number of identities."""

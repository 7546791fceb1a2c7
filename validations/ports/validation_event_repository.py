"""
ValidationEvent repository port (interface).

The audit store is append-only: there is no update or delete.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from validations.domain.validation_event import ValidationEvent


class ValidationEventRepository(ABC):
    """Abstract append-only repository for ValidationEvent records."""

    @abstractmethod
    async def append(self, event: ValidationEvent) -> ValidationEvent:
        """
        Persist a new event.

        Raises:
            InfrastructureError: If the store is unavailable
        """

    @abstractmethod
    async def list_recent(self, limit: int) -> List[ValidationEvent]:
        """Most recent events first."""

    @abstractmethod
    async def count_since(self, since: datetime) -> int:
        """Events with ``timestamp >= since``."""

    @abstractmethod
    async def count(self) -> int:
        """Total number of stored events."""

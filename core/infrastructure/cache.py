"""
Cache port used by application services.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class CachePort(ABC):
    """
    Key/value cache with an atomic counter.

    Implementations never raise; an unreachable cache reads as a miss.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Cached value, or None."""

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """Store ``value`` for ``timeout`` seconds (None keeps it)."""

    @abstractmethod
    async def incr(self, key: str) -> Optional[int]:
        """Increment a counter that starts at 0; None if the cache is unreachable."""

"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional

from core.domain.exceptions import InvalidDomainError, InvalidDurationError

# Presets offered by the admin panel; any positive number of days is accepted.
RECOMMENDED_TTL_DAYS = (7, 15, 30, 90, 365)

MAX_DOMAIN_LENGTH = 253


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


class Role(str, Enum):
    """Identity role. Fixed at registration."""

    ADMIN = "admin"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object, stored lower-cased."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value or self.value.strip() != self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    @classmethod
    def parse(cls, raw: str) -> "Email":
        return cls((raw or "").strip().lower())

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True)
class ProductSlug(ValueObject):
    """Product slug value object."""

    value: str

    def __post_init__(self):
        """Validate slug format."""
        if not self.value:
            raise ValueError("Product slug cannot be empty")
        if not self.value.replace("-", "").replace("_", "").isalnum():
            raise ValueError(f"Invalid product slug format: {self.value}")

    def __str__(self) -> str:
        """Return slug as string."""
        return self.value


@dataclass(frozen=True)
class Duration(ValueObject):
    """
    Validated key lifetime in whole days.

    Booleans, floats, zero and negative values are rejected with
    InvalidDurationError rather than coerced.
    """

    days: int

    def __post_init__(self):
        if isinstance(self.days, bool) or not isinstance(self.days, int):
            raise InvalidDurationError(
                f"Duration must be a whole number of days, got {self.days!r}"
            )
        if self.days <= 0:
            raise InvalidDurationError(f"Duration must be positive, got {self.days}")

    @classmethod
    def from_days(cls, value) -> "Duration":
        return cls(value)

    @property
    def is_recommended(self) -> bool:
        return self.days in RECOMMENDED_TTL_DAYS

    def as_timedelta(self) -> timedelta:
        return timedelta(days=self.days)

    def expires_after(self, start: datetime) -> datetime:
        return start + self.as_timedelta()


def normalize_domain(raw: str) -> str:
    """Trim, lower-case and drop the trailing root dot of a hostname."""
    return (raw or "").strip().lower().rstrip(".")


@dataclass(frozen=True)
class DomainWhitelist(ValueObject):
    """
    Set of hostnames a credential may be validated from.

    An empty whitelist is unrestricted.
    """

    domains: FrozenSet[str] = frozenset()

    @classmethod
    def from_iterable(cls, raw_domains: Optional[Iterable[str]]) -> "DomainWhitelist":
        """
        Normalize entries, dropping blanks and collapsing duplicates.

        Only an empty input clears the whitelist; entries that are all
        blank are rejected rather than read as unrestricted.
        """
        normalized = set()
        blank = None
        for raw in raw_domains or ():
            if not isinstance(raw, str):
                raise InvalidDomainError(repr(raw))
            domain = normalize_domain(raw)
            if not domain:
                blank = raw
                continue
            if (
                len(domain) > MAX_DOMAIN_LENGTH
                or "/" in domain
                or any(ch.isspace() for ch in domain)
            ):
                raise InvalidDomainError(raw)
            normalized.add(domain)
        if blank is not None and not normalized:
            raise InvalidDomainError(blank)
        return cls(frozenset(normalized))

    @property
    def is_unrestricted(self) -> bool:
        return not self.domains

    def allows(self, domain: Optional[str]) -> bool:
        if self.is_unrestricted:
            return True
        return normalize_domain(domain) in self.domains

    def to_list(self) -> List[str]:
        return sorted(self.domains)

"""Model registration for the identities app."""
from identities.infrastructure.models import AuthToken, Identity  # noqa: F401

"""Model registration for the credentials app."""
from credentials.infrastructure.models import Credential  # noqa: F401

"""Model registration for the validations app."""
from validations.infrastructure.models import ValidationEvent  # noqa: F401

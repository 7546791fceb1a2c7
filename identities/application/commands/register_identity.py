"""
RegisterIdentityCommand.

Self-service sign-up. Always creates a customer.
"""
from dataclasses import dataclass


@dataclass
class RegisterIdentityCommand:
    """Command to register a new customer identity."""

    email: str
    password: str
    full_name: str = ""

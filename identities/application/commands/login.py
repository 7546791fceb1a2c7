"""
Login and logout commands.
"""
from dataclasses import dataclass


@dataclass
class LoginCommand:
    """Exchange email and password for a bearer token."""

    email: str
    password: str


@dataclass
class LogoutCommand:
    """Revoke the bearer token the request was made with."""

    raw_token: str

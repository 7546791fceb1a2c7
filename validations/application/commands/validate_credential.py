"""
ValidateCredentialCommand.

Issued by license-protected software, not by a signed-in identity.
"""
from dataclasses import dataclass


@dataclass
class ValidateCredentialCommand:
    """Command to validate a presented license key."""

    api_key: str
    secret: str = ""
    domain: str = ""
    client_ip: str = ""

"""
Commands that change an existing credential.
"""
import uuid
from dataclasses import dataclass
from typing import List

from core.domain.access import CallerContext


@dataclass
class UpdateAllowedDomainsCommand:
    """Replace the domain whitelist of a credential."""

    caller: CallerContext
    credential_id: uuid.UUID
    allowed_domains: List[str]


@dataclass
class RevokeCredentialCommand:
    """Revoke a credential. Irreversible."""

    caller: CallerContext
    credential_id: uuid.UUID

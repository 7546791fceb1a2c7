"""
IssueCredentialCommand.

Command to issue a license key for an identity and product.
"""
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from core.domain.access import CallerContext


@dataclass
class IssueCredentialCommand:
    """
    Command to issue a credential.

    ``ttl_days`` is passed through unvalidated; the handler turns it into
    a Duration. None issues a non-expiring key.
    """

    caller: CallerContext
    owner_identity_id: uuid.UUID
    product_id: uuid.UUID
    ttl_days: Optional[Any] = None

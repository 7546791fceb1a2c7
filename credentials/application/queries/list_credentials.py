"""
ListCredentialsQuery.
"""
from dataclasses import dataclass

from core.domain.access import CallerContext


@dataclass
class ListCredentialsQuery:
    """
    Query for credentials.

    ``all_owners`` lists every credential and requires an admin caller;
    otherwise only the caller's own credentials are returned.
    """

    caller: CallerContext
    all_owners: bool = False

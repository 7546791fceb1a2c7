"""
GetProfileQuery.
"""
from dataclasses import dataclass

from core.domain.access import CallerContext


@dataclass
class GetProfileQuery:
    """Query for the caller's own identity."""

    caller: CallerContext

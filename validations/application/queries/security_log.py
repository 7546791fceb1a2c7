"""
Security log queries.
"""
from dataclasses import dataclass
from typing import Optional

from core.domain.access import CallerContext


@dataclass
class ListValidationEventsQuery:
    """Most recent validation events, newest first."""

    caller: CallerContext
    limit: int = 50


@dataclass
class SubscribeSecurityLogQuery:
    """Open a live monitoring session."""

    caller: CallerContext
    session_id: Optional[str] = None


@dataclass
class GetDashboardStatsQuery:
    """Headline counters for the admin dashboard."""

    caller: CallerContext

"""
Security log handlers: recent events, live subscriptions and dashboard stats.
"""
import logging
from datetime import datetime
from typing import Callable, List

from django.conf import settings

from core.domain.access import AccessPolicy
from core.domain.clock import start_of_utc_day, utc_now
from core.infrastructure.events import InMemoryEventBus, event_bus
from credentials.ports.credential_repository import CredentialRepository
from identities.ports.identity_repository import IdentityRepository
from validations.application.dto.validation_dto import (
    DashboardStatsDTO,
    SecurityLogSubscription,
    ValidationEventDTO,
)
from validations.application.queries.security_log import (
    GetDashboardStatsQuery,
    ListValidationEventsQuery,
    SubscribeSecurityLogQuery,
)
from validations.infrastructure.security_log_broadcaster import SecurityLogBroadcaster
from validations.ports.validation_event_repository import ValidationEventRepository

logger = logging.getLogger(__name__)


class ListValidationEventsHandler:
    """Handler for ListValidationEventsQuery."""

    def __init__(self, validation_event_repository: ValidationEventRepository):
        self.validation_event_repository = validation_event_repository

    async def handle(self, query: ListValidationEventsQuery) -> List[ValidationEventDTO]:
        AccessPolicy.require_admin(query.caller, "read the security log")
        limit = max(1, min(query.limit, settings.SECURITY_LOG_MAX_PAGE_SIZE))
        events = await self.validation_event_repository.list_recent(limit)
        return [ValidationEventDTO.from_entity(event) for event in events]


class SubscribeSecurityLogHandler:
    """
    Handler for SubscribeSecurityLogQuery.

    The session is opened before the snapshot is read, so nothing that
    lands in between is lost; snapshot entries are then excluded from
    the live feed so nothing is delivered twice.
    """

    def __init__(
        self,
        validation_event_repository: ValidationEventRepository,
        broadcaster: SecurityLogBroadcaster,
        bus: InMemoryEventBus = event_bus,
    ):
        self.validation_event_repository = validation_event_repository
        self.broadcaster = broadcaster
        self.bus = bus

    async def handle(self, query: SubscribeSecurityLogQuery) -> SecurityLogSubscription:
        AccessPolicy.require_admin(query.caller, "monitor the security log")
        self.bus.ensure_relay_started()

        session = self.broadcaster.open_session(query.session_id)
        try:
            snapshot = await self.validation_event_repository.list_recent(
                settings.SECURITY_LOG_SNAPSHOT_SIZE
            )
        except Exception:
            self.broadcaster.close_session(session)
            raise
        session.exclude(event.id for event in snapshot)

        logger.info(
            "Security log subscription opened",
            extra={
                "session_id": session.session_id,
                "identity_id": str(query.caller.identity_id),
                "snapshot_size": len(snapshot),
            },
        )
        return SecurityLogSubscription(
            session=session,
            snapshot=[ValidationEventDTO.from_entity(event) for event in snapshot],
        )


class GetDashboardStatsHandler:
    """Handler for GetDashboardStatsQuery."""

    def __init__(
        self,
        identity_repository: IdentityRepository,
        credential_repository: CredentialRepository,
        validation_event_repository: ValidationEventRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.identity_repository = identity_repository
        self.credential_repository = credential_repository
        self.validation_event_repository = validation_event_repository
        self.clock = clock

    async def handle(self, query: GetDashboardStatsQuery) -> DashboardStatsDTO:
        AccessPolicy.require_admin(query.caller, "view dashboard statistics")
        now = self.clock()
        return DashboardStatsDTO(
            total_users=await self.identity_repository.count(),
            active_api_keys=await self.credential_repository.count_active(now),
            paid_orders=0,
            validations_today=await self.validation_event_repository.count_since(
                start_of_utc_day(now)
            ),
        )

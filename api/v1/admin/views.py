"""
Admin API views.

Issuance, revocation, catalog management, dashboard statistics and the
security log (paged and live).
"""

import json
import logging
import uuid
from typing import Any, Iterator

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.http import StreamingHttpResponse
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.admin.serializers import (
    CreateApiKeyRequestSerializer,
    CreateProductRequestSerializer,
    DashboardStatsSerializer,
    IssuedApiKeySerializer,
    UpdateApiKeyRequestSerializer,
    ValidationEventSerializer,
)
from api.v1.context import caller_of, list_payload
from api.v1.customer.serializers import CredentialSerializer, ProductSerializer
from core.domain.access import AccessPolicy
from core.domain.exceptions import InvalidFieldError
from core.instrumentation import Status, StatusCode, get_tracer
from credentials.application.commands.credential_lifecycle import (
    RevokeCredentialCommand,
    UpdateAllowedDomainsCommand,
)
from credentials.application.commands.issue_credential import IssueCredentialCommand
from credentials.application.handlers.credential_lifecycle_handlers import (
    RevokeCredentialHandler,
    UpdateAllowedDomainsHandler,
)
from credentials.application.handlers.issue_credential_handler import IssueCredentialHandler
from credentials.application.handlers.list_credentials_handler import ListCredentialsHandler
from credentials.application.queries.list_credentials import ListCredentialsQuery
from credentials.application.services.credential_cache_service import CredentialCacheService
from credentials.infrastructure.repositories.django_credential_repository import (
    DjangoCredentialRepository,
)
from identities.infrastructure.repositories.django_identity_repository import (
    DjangoIdentityRepository,
)
from products.application.commands.create_product import CreateProductCommand
from products.application.handlers.create_product_handler import CreateProductHandler
from products.infrastructure.repositories.django_product_repository import (
    DjangoProductRepository,
)
from validations.application.dto.validation_dto import (
    SecurityLogSubscription,
    ValidationEventDTO,
)
from validations.application.handlers.security_log_handlers import (
    GetDashboardStatsHandler,
    ListValidationEventsHandler,
    SubscribeSecurityLogHandler,
)
from validations.application.queries.security_log import (
    GetDashboardStatsQuery,
    ListValidationEventsQuery,
    SubscribeSecurityLogQuery,
)
from validations.infrastructure.repositories.django_validation_event_repository import (
    DjangoValidationEventRepository,
)
from validations.infrastructure.security_log_broadcaster import security_log_broadcaster

logger = logging.getLogger(__name__)

# Initialize repositories (in production, use DI container)
_identity_repo = DjangoIdentityRepository()
_product_repo = DjangoProductRepository()
_credential_repo = DjangoCredentialRepository()
_validation_event_repo = DjangoValidationEventRepository()

tracer = get_tracer(__name__)


class CreateApiKeyView(APIView):
    """Issue a license key for a user and product."""

    @extend_schema(
        operation_id="create_api_key",
        summary="Issue License Key",
        description=(
            "Issue a license key. The response carries the plaintext secret; it "
            "is never returned again. Use ttl_days (recommended 7, 15, 30, 90 or "
            "365) or expires_at; omit both for a non-expiring key."
        ),
        tags=["Admin API"],
        request=CreateApiKeyRequestSerializer,
        responses={
            201: IssuedApiKeySerializer,
            400: {"description": "Invalid duration"},
            403: {"description": "Not an administrator"},
            404: {"description": "User or product not found"},
            409: {"description": "Could not generate a unique key"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create_api_key)(request)

    async def _handle_create_api_key(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_api_key") as span:
            span.set_attribute("operation", "create_api_key")
            caller = caller_of(request)
            serializer = CreateApiKeyRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = IssueCredentialHandler(
                identity_repository=_identity_repo,
                product_repository=_product_repo,
                credential_repository=_credential_repo,
            )
            result = await handler.handle(
                IssueCredentialCommand(
                    caller=caller,
                    owner_identity_id=data["user_id"],
                    product_id=data["product_id"],
                    ttl_days=data["ttl_days"],
                )
            )

            span.set_attribute("credential.id", str(result.id))
            span.set_attribute("product.id", str(result.product_id))
            span.set_status(Status(StatusCode.OK))
            return Response(IssuedApiKeySerializer(result).data, status=status.HTTP_201_CREATED)


class CreateProductView(APIView):
    """Add a product to the catalog."""

    @extend_schema(
        operation_id="create_product",
        summary="Create Product",
        tags=["Admin API"],
        request=CreateProductRequestSerializer,
        responses={
            201: ProductSerializer,
            403: {"description": "Not an administrator"},
            409: {"description": "Slug already taken"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create_product)(request)

    async def _handle_create_product(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_product") as span:
            caller = caller_of(request)
            serializer = CreateProductRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = CreateProductHandler(product_repository=_product_repo)
            result = await handler.handle(
                CreateProductCommand(caller=caller, **serializer.validated_data)
            )

            span.set_attribute("product.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(ProductSerializer(result).data, status=status.HTTP_201_CREATED)


class ListApiKeysView(APIView):
    """Every license key, for administrators."""

    @extend_schema(
        operation_id="list_api_keys",
        summary="List All License Keys",
        tags=["Admin API"],
        responses={200: CredentialSerializer(many=True), 403: {"description": "Forbidden"}},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list_api_keys)(request)

    async def _handle_list_api_keys(self, request: Request) -> Response:
        handler = ListCredentialsHandler(
            credential_repository=_credential_repo,
            product_repository=_product_repo,
        )
        credentials = await handler.handle(
            ListCredentialsQuery(caller=caller_of(request), all_owners=True)
        )
        return Response(list_payload(CredentialSerializer(credentials, many=True).data))


class UpdateApiKeyView(APIView):
    """Admin edit of the whitelist and/or revocation of one license key."""

    @extend_schema(
        operation_id="update_api_key",
        summary="Update License Key",
        description='Replace allowed_domains and/or set status to "revoked".',
        tags=["Admin API"],
        request=UpdateApiKeyRequestSerializer,
        responses={
            200: CredentialSerializer,
            400: {"description": "Bad Request"},
            403: {"description": "Not an administrator"},
            404: {"description": "License key not found"},
        },
    )
    def patch(self, request: Request, credential_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update_api_key)(request, credential_id)

    async def _handle_update_api_key(self, request: Request, credential_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_api_key") as span:
            span.set_attribute("credential.id", str(credential_id))
            caller = caller_of(request)
            AccessPolicy.require_admin(caller, "edit license keys through the admin API")
            serializer = UpdateApiKeyRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            cache_service = CredentialCacheService()
            result = None
            if "allowed_domains" in data:
                result = await UpdateAllowedDomainsHandler(
                    credential_repository=_credential_repo,
                    product_repository=_product_repo,
                    cache_service=cache_service,
                ).handle(
                    UpdateAllowedDomainsCommand(
                        caller=caller,
                        credential_id=credential_id,
                        allowed_domains=data["allowed_domains"],
                    )
                )
            if data.get("status") == "revoked":
                result = await RevokeCredentialHandler(
                    credential_repository=_credential_repo,
                    product_repository=_product_repo,
                    cache_service=cache_service,
                ).handle(RevokeCredentialCommand(caller=caller, credential_id=credential_id))
            span.set_status(Status(StatusCode.OK))
            return Response(CredentialSerializer(result).data, status=status.HTTP_200_OK)


class RevokeApiKeyView(APIView):
    """Revoke a license key. Irreversible; repeating it is harmless."""

    @extend_schema(
        operation_id="revoke_api_key",
        summary="Revoke License Key",
        tags=["Admin API"],
        request=None,
        responses={
            200: CredentialSerializer,
            403: {"description": "Not an administrator"},
            404: {"description": "License key not found"},
        },
    )
    def post(self, request: Request, credential_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_revoke)(request, credential_id)

    async def _handle_revoke(self, request: Request, credential_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("revoke_api_key") as span:
            span.set_attribute("credential.id", str(credential_id))
            handler = RevokeCredentialHandler(
                credential_repository=_credential_repo,
                product_repository=_product_repo,
                cache_service=CredentialCacheService(),
            )
            result = await handler.handle(
                RevokeCredentialCommand(caller=caller_of(request), credential_id=credential_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(CredentialSerializer(result).data, status=status.HTTP_200_OK)


class DashboardStatsView(APIView):
    """Headline counters for the admin dashboard."""

    @extend_schema(
        operation_id="get_dashboard_stats",
        summary="Dashboard Statistics",
        tags=["Admin API"],
        responses={200: DashboardStatsSerializer, 403: {"description": "Forbidden"}},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_stats)(request)

    async def _handle_stats(self, request: Request) -> Response:
        handler = GetDashboardStatsHandler(
            identity_repository=_identity_repo,
            credential_repository=_credential_repo,
            validation_event_repository=_validation_event_repo,
        )
        stats = await handler.handle(GetDashboardStatsQuery(caller=caller_of(request)))
        return Response(DashboardStatsSerializer(stats).data)


class SecurityLogView(APIView):
    """Most recent validation events, newest first."""

    @extend_schema(
        operation_id="list_security_log",
        summary="Security Log",
        tags=["Admin API"],
        parameters=[
            OpenApiParameter(
                name="limit",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Number of events (default 50, max 500)",
            ),
        ],
        responses={200: ValidationEventSerializer(many=True), 403: {"description": "Forbidden"}},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list_logs)(request)

    async def _handle_list_logs(self, request: Request) -> Response:
        caller = caller_of(request)
        raw_limit = request.query_params.get("limit", str(settings.SECURITY_LOG_SNAPSHOT_SIZE))
        try:
            limit = int(raw_limit)
        except ValueError:
            raise InvalidFieldError("limit must be an integer") from None

        handler = ListValidationEventsHandler(validation_event_repository=_validation_event_repo)
        events = await handler.handle(ListValidationEventsQuery(caller=caller, limit=limit))
        return Response(list_payload(ValidationEventSerializer(events, many=True).data))


def sse_frame(event: str, data: Any) -> str:
    """Encode one Server-Sent Events frame."""
    payload = json.dumps(data, cls=DjangoJSONEncoder, separators=(",", ":"))
    return f"event: {event}\ndata: {payload}\n\n"


def security_log_frames(subscription: SecurityLogSubscription, keepalive: float) -> Iterator[str]:
    """
    Snapshot frame, then one frame per live event.

    A comment line is sent whenever the session is idle for ``keepalive``
    seconds so proxies keep the connection open. The session is closed
    when the client goes away.
    """
    session = subscription.session
    try:
        yield sse_frame(
            "snapshot", ValidationEventSerializer(subscription.snapshot, many=True).data
        )
        while True:
            event = session.next_event(timeout=keepalive)
            if event is None:
                if session.closed:
                    return
                yield ": keepalive\n\n"
                continue
            yield sse_frame(
                "security_log",
                ValidationEventSerializer(ValidationEventDTO.from_entity(event)).data,
            )
    finally:
        security_log_broadcaster.close_session(session)


class SecurityLogStreamView(APIView):
    """Live security log over Server-Sent Events."""

    def perform_content_negotiation(self, request, force=False):
        # Clients send Accept: text/event-stream; errors still render as JSON.
        return super().perform_content_negotiation(request, force=True)

    @extend_schema(
        operation_id="stream_security_log",
        summary="Live Security Log",
        description=(
            "Server-Sent Events. The first event is `snapshot` (the 50 most recent "
            "validation events, newest first); each later validation arrives as a "
            "`security_log` event."
        ),
        tags=["Admin API"],
        responses={200: {"description": "text/event-stream"}, 403: {"description": "Forbidden"}},
    )
    def get(self, request: Request) -> StreamingHttpResponse:
        subscription = async_to_sync(self._subscribe)(request)
        response = StreamingHttpResponse(
            security_log_frames(subscription, settings.SECURITY_LOG_KEEPALIVE_SECONDS),
            content_type="text/event-stream",
        )
        response["Cache-Control"] = "no-cache"
        response["X-Accel-Buffering"] = "no"
        logger.info(
            "Security log stream opened",
            extra={
                "session_id": subscription.session.session_id,
                "snapshot_size": len(subscription.snapshot),
            },
        )
        return response

    async def _subscribe(self, request: Request) -> SecurityLogSubscription:
        handler = SubscribeSecurityLogHandler(
            validation_event_repository=_validation_event_repo,
            broadcaster=security_log_broadcaster,
        )
        return await handler.handle(
            SubscribeSecurityLogQuery(
                caller=caller_of(request),
                session_id=request.headers.get("X-Monitoring-Session"),
            )
        )

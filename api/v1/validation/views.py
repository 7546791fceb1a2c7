"""
Validation API view.

Called by license-protected software, not by signed-in users. Denials
are normal 200 responses carrying ``valid: false`` and an error code.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.validation.serializers import ValidateRequestSerializer, ValidateResponseSerializer
from core.domain.exceptions import MissingFieldError
from core.instrumentation import Status, StatusCode, get_tracer
from credentials.application.services.credential_cache_service import CredentialCacheService
from credentials.infrastructure.repositories.django_credential_repository import (
    DjangoCredentialRepository,
)
from validations.application.commands.validate_credential import ValidateCredentialCommand
from validations.application.handlers.validate_credential_handler import (
    ValidateCredentialHandler,
)
from validations.application.services.audit_trail import AuditTrail
from validations.infrastructure.repositories.django_validation_event_repository import (
    DjangoValidationEventRepository,
)

_credential_repo = DjangoCredentialRepository()
_validation_event_repo = DjangoValidationEventRepository()

tracer = get_tracer(__name__)


class ValidateView(APIView):
    """Decide whether a license key may be used."""

    @extend_schema(
        operation_id="validate_api_key",
        summary="Validate License Key",
        description=(
            "Checks, in order: key exists, not revoked, not expired, domain "
            "allowed, secret matches. Every call is recorded in the security log."
        ),
        tags=["Validation API"],
        request=ValidateRequestSerializer,
        responses={
            200: ValidateResponseSerializer,
            400: {"description": "api_key missing"},
            503: {"description": "Credential store unavailable"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        with tracer.start_as_current_span("validate_api_key") as span:
            serializer = ValidateRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            if not data["api_key"]:
                raise MissingFieldError("api_key")

            handler = ValidateCredentialHandler(
                credential_repository=_credential_repo,
                audit_trail=AuditTrail(_validation_event_repo),
                cache_service=CredentialCacheService(),
            )
            result = await handler.handle(
                ValidateCredentialCommand(
                    api_key=data["api_key"],
                    secret=data["secret_or_signature"] or data["secret"],
                    domain=data["domain"],
                    client_ip=data["client_ip"] or request.META.get("REMOTE_ADDR", ""),
                )
            )

            span.set_attribute("validation.error_code", result.error_code)
            span.set_status(Status(StatusCode.OK))
            return Response(ValidateResponseSerializer(result).data, status=status.HTTP_200_OK)

"""
Customer API views.

Customers see their own license keys and the products those keys are
for, and may edit the domain whitelist of keys they own.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.context import caller_of, list_payload
from api.v1.customer.serializers import (
    CredentialSerializer,
    ProductSerializer,
    UpdateAllowedDomainsRequestSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from credentials.application.commands.credential_lifecycle import UpdateAllowedDomainsCommand
from credentials.application.handlers.credential_lifecycle_handlers import (
    UpdateAllowedDomainsHandler,
)
from credentials.application.handlers.list_credentials_handler import ListCredentialsHandler
from credentials.application.queries.list_credentials import ListCredentialsQuery
from credentials.application.services.credential_cache_service import CredentialCacheService
from credentials.infrastructure.repositories.django_credential_repository import (
    DjangoCredentialRepository,
)
from products.application.handlers.list_products_handler import ListProductsHandler
from products.application.queries.list_products import ListProductsQuery
from products.infrastructure.repositories.django_product_repository import (
    DjangoProductRepository,
)

_credential_repo = DjangoCredentialRepository()
_product_repo = DjangoProductRepository()

tracer = get_tracer(__name__)


class ListProductsView(APIView):
    """Products visible to the caller."""

    @extend_schema(
        operation_id="list_products",
        summary="List Products",
        description=(
            "Administrators see the whole catalog; customers see the products "
            "their license keys are for."
        ),
        tags=["Customer API"],
        responses={200: ProductSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list_products)(request)

    async def _handle_list_products(self, request: Request) -> Response:
        handler = ListProductsHandler(
            product_repository=_product_repo,
            credential_repository=_credential_repo,
        )
        products = await handler.handle(ListProductsQuery(caller=caller_of(request)))
        return Response(list_payload(ProductSerializer(products, many=True).data))


class ListOwnCredentialsView(APIView):
    """License keys owned by the caller."""

    @extend_schema(
        operation_id="list_own_api_keys",
        summary="List My License Keys",
        tags=["Customer API"],
        responses={200: CredentialSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list_credentials)(request)

    async def _handle_list_credentials(self, request: Request) -> Response:
        handler = ListCredentialsHandler(
            credential_repository=_credential_repo,
            product_repository=_product_repo,
        )
        credentials = await handler.handle(ListCredentialsQuery(caller=caller_of(request)))
        return Response(list_payload(CredentialSerializer(credentials, many=True).data))


class UpdateAllowedDomainsView(APIView):
    """Replace the domain whitelist of a license key the caller owns."""

    @extend_schema(
        operation_id="update_allowed_domains",
        summary="Update Allowed Domains",
        description="Replaces the whitelist. An empty list allows every domain.",
        tags=["Customer API"],
        request=UpdateAllowedDomainsRequestSerializer,
        responses={
            200: CredentialSerializer,
            400: {"description": "Invalid domain"},
            403: {"description": "Not the owner"},
            404: {"description": "License key not found"},
        },
    )
    def patch(self, request: Request, credential_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update_domains)(request, credential_id)

    async def _handle_update_domains(self, request: Request, credential_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_allowed_domains") as span:
            span.set_attribute("credential.id", str(credential_id))
            caller = caller_of(request)
            serializer = UpdateAllowedDomainsRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = UpdateAllowedDomainsHandler(
                credential_repository=_credential_repo,
                product_repository=_product_repo,
                cache_service=CredentialCacheService(),
            )
            result = await handler.handle(
                UpdateAllowedDomainsCommand(
                    caller=caller,
                    credential_id=credential_id,
                    allowed_domains=serializer.validated_data["allowed_domains"],
                )
            )

            span.set_attribute("allowed_domains.count", len(result.allowed_domains))
            span.set_status(Status(StatusCode.OK))
            return Response(CredentialSerializer(result).data, status=status.HTTP_200_OK)

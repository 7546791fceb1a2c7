"""
Authentication API views.

Login and registration are open; profile and logout require a bearer
token (enforced by BearerTokenAuthenticationMiddleware).
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.auth.serializers import (
    IdentitySerializer,
    LoginRequestSerializer,
    LoginResponseSerializer,
    RegisterRequestSerializer,
    RegisterResponseSerializer,
)
from api.v1.context import caller_of
from core.instrumentation import Status, StatusCode, get_tracer
from identities.application.commands.login import LoginCommand, LogoutCommand
from identities.application.commands.register_identity import RegisterIdentityCommand
from identities.application.handlers.get_profile_handler import GetProfileHandler
from identities.application.handlers.login_handler import LoginHandler, LogoutHandler
from identities.application.handlers.register_identity_handler import RegisterIdentityHandler
from identities.application.queries.get_profile import GetProfileQuery
from identities.infrastructure.repositories.django_auth_token_repository import (
    DjangoAuthTokenRepository,
)
from identities.infrastructure.repositories.django_identity_repository import (
    DjangoIdentityRepository,
)

_identity_repo = DjangoIdentityRepository()
_auth_token_repo = DjangoAuthTokenRepository()

tracer = get_tracer(__name__)


class LoginView(APIView):
    """Exchange email and password for a bearer token."""

    @extend_schema(
        operation_id="login",
        summary="Log In",
        tags=["Auth"],
        request=LoginRequestSerializer,
        responses={
            200: LoginResponseSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Invalid email or password"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_login)(request)

    async def _handle_login(self, request: Request) -> Response:
        with tracer.start_as_current_span("login") as span:
            serializer = LoginRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = LoginHandler(
                identity_repository=_identity_repo,
                auth_token_repository=_auth_token_repo,
            )
            result = await handler.handle(LoginCommand(**serializer.validated_data))

            span.set_attribute("identity.id", str(result.user.id))
            span.set_status(Status(StatusCode.OK))
            return Response(LoginResponseSerializer(result).data, status=status.HTTP_200_OK)


class RegisterView(APIView):
    """Self-service registration; always creates a customer."""

    @extend_schema(
        operation_id="register",
        summary="Register",
        tags=["Auth"],
        request=RegisterRequestSerializer,
        responses={
            201: RegisterResponseSerializer,
            400: {"description": "Bad Request"},
            409: {"description": "Email already registered"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_register)(request)

    async def _handle_register(self, request: Request) -> Response:
        with tracer.start_as_current_span("register") as span:
            serializer = RegisterRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = RegisterIdentityHandler(identity_repository=_identity_repo)
            result = await handler.handle(RegisterIdentityCommand(**serializer.validated_data))

            span.set_attribute("identity.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return Response(
                RegisterResponseSerializer({"user": result}).data,
                status=status.HTTP_201_CREATED,
            )


class ProfileView(APIView):
    """Current identity."""

    @extend_schema(
        operation_id="get_profile",
        summary="Get Profile",
        tags=["Auth"],
        responses={200: IdentitySerializer, 401: {"description": "Unauthenticated"}},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_get_profile)(request)

    async def _handle_get_profile(self, request: Request) -> Response:
        handler = GetProfileHandler(identity_repository=_identity_repo)
        result = await handler.handle(GetProfileQuery(caller=caller_of(request)))
        return Response(IdentitySerializer(result).data, status=status.HTTP_200_OK)


class LogoutView(APIView):
    """Revoke the bearer token used for this request."""

    @extend_schema(
        operation_id="logout",
        summary="Log Out",
        tags=["Auth"],
        request=None,
        responses={204: None, 401: {"description": "Unauthenticated"}},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_logout)(request)

    async def _handle_logout(self, request: Request) -> Response:
        caller_of(request)
        handler = LogoutHandler(auth_token_repository=_auth_token_repo)
        await handler.handle(LogoutCommand(raw_token=request.raw_token))
        return Response(status=status.HTTP_204_NO_CONTENT)

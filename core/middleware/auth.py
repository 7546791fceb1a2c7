"""
Bearer token authentication middleware.

Resolves ``Authorization: Bearer <token>`` to a CallerContext for the
account-facing endpoints. The validation endpoint is called by
license-protected software and is not covered.
"""
import logging
from typing import Optional

from django.db import DatabaseError
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.domain.access import CallerContext
from core.domain.clock import utc_now
from core.domain.value_objects import Role
from identities.domain.services import hash_token
from identities.infrastructure.models import AuthToken

logger = logging.getLogger(__name__)

PROTECTED_PREFIXES = (
    "/auth/profile",
    "/auth/logout",
    "/admin/",
    "/customer/",
)


def error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)


def bearer_token(request: HttpRequest) -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


class BearerTokenAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for bearer token authentication.

    This middleware:
    1. Requires a bearer token on protected paths
    2. Looks the token up by its sha256 hash and rejects expired/revoked ones
    3. Attaches ``request.caller`` (CallerContext) for the views
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        request.caller = None  # type: ignore[attr-defined]
        if not request.path.startswith(PROTECTED_PREFIXES):
            return None

        raw_token = bearer_token(request)
        if not raw_token:
            return error_response(
                "UNAUTHENTICATED",
                "Missing bearer token. Provide an Authorization: Bearer header.",
                401,
            )

        try:
            token = (
                AuthToken.objects.select_related("identity")
                .filter(
                    token_hash=hash_token(raw_token),
                    revoked_at__isnull=True,
                    expires_at__gt=utc_now(),
                )
                .first()
            )
        except DatabaseError as e:
            logger.error("Error authenticating bearer token: %s", e, exc_info=True)
            return error_response("SERVICE_UNAVAILABLE", "Service temporarily unavailable", 503)

        if token is None:
            logger.warning("Invalid or expired bearer token", extra={"path": request.path})
            return error_response("UNAUTHENTICATED", "Invalid or expired token", 401)

        identity = token.identity
        request.caller = CallerContext(  # type: ignore[attr-defined]
            identity_id=identity.id,
            role=Role(identity.role),
            email=identity.email,
        )
        request.raw_token = raw_token  # type: ignore[attr-defined]
        return None

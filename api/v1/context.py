"""
Helpers shared by the v1 views.
"""
from typing import Any, Dict, Iterable

from rest_framework.request import Request

from core.domain.access import CallerContext
from core.domain.exceptions import UnauthenticatedError


def caller_of(request: Request) -> CallerContext:
    """CallerContext attached by BearerTokenAuthenticationMiddleware."""
    caller = getattr(request, "caller", None)
    if caller is None:
        raise UnauthenticatedError()
    return caller


def list_payload(items: Iterable[Any]) -> Dict[str, Any]:
    """List responses are wrapped as ``{"data": [...]}``."""
    return {"data": list(items)}

"""
API exception handlers.

This module maps domain exceptions to JSON error bodies of the form
``{"error": {"code": ..., "message": ...}}``.
"""

import logging
from typing import Any, Dict, Optional

from django.db import DatabaseError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ConflictError,
    DomainException,
    ForbiddenError,
    InfrastructureError,
    InputError,
    NotFoundError,
    UnauthenticatedError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES = (
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InputError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InfrastructureError, status.HTTP_503_SERVICE_UNAVAILABLE),
)

SERVICE_UNAVAILABLE_MESSAGE = "Service temporarily unavailable"


def error_body(code: str, message: Any) -> Dict[str, Any]:
    return {"error": {"code": code, "message": message}}


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)
    endpoint = _get_endpoint(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, ValidationError):
        response = Response(
            error_body("VALIDATION_ERROR", exc.detail), status=status.HTTP_400_BAD_REQUEST
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        response.data = error_body(code, response.data.get("detail", exc.default_detail))
    elif isinstance(exc, Http404):
        response = Response(
            error_body("NOT_FOUND", "Resource not found"), status=status.HTTP_404_NOT_FOUND
        )
    elif isinstance(exc, DatabaseError):
        logger.error("Database unavailable: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
        response = Response(
            error_body("SERVICE_UNAVAILABLE", SERVICE_UNAVAILABLE_MESSAGE),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    else:
        response = _handle_unexpected_exception(exc, trace_id)

    errors_total.labels(error_type=response.data["error"]["code"], endpoint=endpoint).inc()
    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _get_endpoint(context: Dict[str, Any]) -> str:
    view = context.get("view")
    return view.__class__.__name__ if view is not None else "unknown"


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    for exc_type, mapped in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            status_code = mapped
            break

    if isinstance(exc, InfrastructureError):
        logger.error("Infrastructure error: %s", exc.message, extra={"trace_id": trace_id})
        return Response(error_body(exc.code, SERVICE_UNAVAILABLE_MESSAGE), status=status_code)

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(exc.code, exc.message), status=status_code)


def _handle_unexpected_exception(exc: Exception, trace_id: Optional[str]) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        error_body("INTERNAL_ERROR", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

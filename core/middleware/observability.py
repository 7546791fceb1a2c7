"""
Observability middleware.

Adds correlation ids, structured request logs and Prometheus HTTP
metrics to every request.
"""
import logging
import re
import time
import uuid
from typing import Callable

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

from core.metrics import http_request_duration_seconds, http_requests_total

logger = logging.getLogger(__name__)

UUID_SEGMENT = re.compile(r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")
NUMERIC_SEGMENT = re.compile(r"/\d+")


def normalize_endpoint(path: str) -> str:
    """Collapse ids in a path so metrics keep a bounded label set."""
    return NUMERIC_SEGMENT.sub("/{id}", UUID_SEGMENT.sub("/{id}", path))


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Generates (or propagates) correlation IDs for request tracing
    2. Logs request/response information
    3. Records request count and duration metrics
    4. Adds correlation ID and duration to response headers
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore[attr-defined]
        endpoint = normalize_endpoint(request.path)

        log_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
        }
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_extra["trace_id"] = format_trace_id(span_context.trace_id)
            log_extra["span_id"] = format_span_id(span_context.span_id)

        logger.info("Request started", extra=log_extra)
        start_time = time.time()

        try:
            response = self.get_response(request)
        except Exception as e:
            duration = time.time() - start_time
            self._record_metrics(request.method, endpoint, 500, duration)
            logger.error(
                "Request failed",
                extra={
                    **log_extra,
                    "error_type": type(e).__name__,
                    "duration_ms": round(duration * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration = time.time() - start_time
        self._record_metrics(request.method, endpoint, response.status_code, duration)
        self._log_response(request, response, log_extra, duration)

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        if "trace_id" in log_extra:
            response["X-Trace-ID"] = log_extra["trace_id"]
        return response

    def _record_metrics(self, method: str, endpoint: str, status_code: int, duration: float):
        http_requests_total.labels(
            method=method, endpoint=endpoint, status_code=status_code
        ).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    def _log_response(self, request, response, log_extra, duration):
        """Log structured response information."""
        extra = {
            **log_extra,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
            "streaming": response.streaming,
        }
        caller = getattr(request, "caller", None)
        if caller is not None:
            extra["identity_id"] = str(caller.identity_id)
            extra["role"] = caller.role.value

        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=extra)
        else:
            logger.info("Request completed successfully", extra=extra)

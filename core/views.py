"""
Core views for health checks, readiness and metrics.
"""
from django.core.cache import cache
from django.db import connection
from django.http import HttpResponse, JsonResponse
from django.views import View
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest


def _database_ok() -> bool:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return True
    except Exception:  # pylint: disable=broad-exception-caught
        return False


def _cache_ok(key: str) -> bool:
    try:
        cache.set(key, "ok", 10)
        return cache.get(key) == "ok"
    except Exception:  # pylint: disable=broad-exception-caught
        return False


class HealthView(View):
    """Liveness endpoint."""

    def get(self, _request):
        return JsonResponse({"status": "healthy", "service": "license-key-service"})


class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        if _database_ok():
            return JsonResponse({"status": "healthy", "database": "connected"})
        return JsonResponse({"status": "unhealthy", "database": "disconnected"}, status=503)


class HealthCacheView(View):
    """Cache health check endpoint."""

    def get(self, _request):
        if _cache_ok("health_check"):
            return JsonResponse({"status": "healthy", "cache": "connected"})
        return JsonResponse({"status": "unhealthy", "cache": "disconnected"}, status=503)


class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        checks = {
            "database": _database_ok(),
            "cache": _cache_ok("ready_check"),
        }
        all_healthy = all(checks.values())
        return JsonResponse(
            {"status": "ready" if all_healthy else "not_ready", "checks": checks},
            status=200 if all_healthy else 503,
        )


class MetricsView(View):
    """Prometheus scrape endpoint."""

    def get(self, _request):
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)

"""
URL configuration for LicenseKeyService project.

Auth, admin, customer and validation endpoints are mounted at the root so
existing clients keep working against the paths they already call.
"""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from core.views import (
    HealthCacheView,
    HealthDBView,
    HealthView,
    MetricsView,
    ReadyView,
)

urlpatterns = [
    # Health check endpoints
    path("health/", HealthView.as_view(), name="health"),
    path("health/db/", HealthDBView.as_view(), name="health-db"),
    path("health/cache/", HealthCacheView.as_view(), name="health-cache"),
    path("ready/", ReadyView.as_view(), name="ready"),
    path("metrics", MetricsView.as_view(), name="metrics"),
    # API endpoints
    path("auth/", include("api.v1.auth.urls")),
    path("admin/", include("api.v1.admin.urls")),
    path("customer/", include("api.v1.customer.urls")),
    path("", include("api.v1.validation.urls")),
    # OpenAPI Schema
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]

"""
URL configuration for admin endpoints.
"""

from django.urls import path

from api.v1.admin import views

app_name = "admin_api"

urlpatterns = [
    path("create-apikey", views.CreateApiKeyView.as_view(), name="create-api-key"),
    path("create-product", views.CreateProductView.as_view(), name="create-product"),
    path("apikeys", views.ListApiKeysView.as_view(), name="list-api-keys"),
    path("apikey/<uuid:credential_id>", views.UpdateApiKeyView.as_view(), name="update-api-key"),
    path(
        "apikey/<uuid:credential_id>/revoke",
        views.RevokeApiKeyView.as_view(),
        name="revoke-api-key",
    ),
    path("stats", views.DashboardStatsView.as_view(), name="stats"),
    path("logs", views.SecurityLogView.as_view(), name="logs"),
    path("logs/stream", views.SecurityLogStreamView.as_view(), name="logs-stream"),
]

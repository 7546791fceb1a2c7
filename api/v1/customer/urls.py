"""
URL configuration for customer endpoints.
"""

from django.urls import path

from api.v1.customer import views

app_name = "customer_api"

urlpatterns = [
    path("products", views.ListProductsView.as_view(), name="list-products"),
    path("apikeys", views.ListOwnCredentialsView.as_view(), name="list-api-keys"),
    path(
        "apikey/<uuid:credential_id>/domains",
        views.UpdateAllowedDomainsView.as_view(),
        name="update-allowed-domains",
    ),
]

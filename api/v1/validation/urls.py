"""
URL configuration for the validation endpoint.
"""

from django.urls import path

from api.v1.validation import views

app_name = "validation_api"

urlpatterns = [
    path("validate", views.ValidateView.as_view(), name="validate"),
]

"""
URL configuration for authentication endpoints.
"""

from django.urls import path

from api.v1.auth import views

app_name = "auth_api"

urlpatterns = [
    path("login", views.LoginView.as_view(), name="login"),
    path("register", views.RegisterView.as_view(), name="register"),
    path("profile", views.ProfileView.as_view(), name="profile"),
    path("logout", views.LogoutView.as_view(), name="logout"),
]

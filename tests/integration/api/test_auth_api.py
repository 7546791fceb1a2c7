"""
Integration tests for authentication endpoints.
"""
import pytest

from conftest import ADMIN_PASSWORD


@pytest.mark.django_db
@pytest.mark.integration
class TestAuthAPI:
    """Integration tests for Auth API."""

    def test_register_creates_customer(self, api_client):
        response = api_client.post(
            "/auth/register",
            {"email": "New@Example.com", "password": "long-enough", "full_name": "New User"},
            format="json",
        )

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["email"] == "new@example.com"
        assert user["role"] == "customer"
        assert "password" not in str(response.json())

    def test_register_ignores_role_in_body(self, api_client):
        response = api_client.post(
            "/auth/register",
            {"email": "sneaky@example.com", "password": "long-enough", "role": "admin"},
            format="json",
        )
        assert response.json()["user"]["role"] == "customer"

    def test_register_duplicate_email(self, api_client, db_customer):
        response = api_client.post(
            "/auth/register",
            {"email": "alice@example.com", "password": "long-enough"},
            format="json",
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "EMAIL_ALREADY_REGISTERED"

    def test_register_missing_password(self, api_client):
        response = api_client.post("/auth/register", {"email": "x@example.com"}, format="json")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_login_profile_logout(self, api_client, db_admin):
        response = api_client.post(
            "/auth/login",
            {"email": "admin@example.com", "password": ADMIN_PASSWORD},
            format="json",
        )
        assert response.status_code == 200
        body = response.json()
        assert body["user"]["role"] == "admin"
        assert body["token"]

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {body['token']}")
        profile = api_client.get("/auth/profile")
        assert profile.status_code == 200
        assert profile.json()["email"] == "admin@example.com"

        assert api_client.post("/auth/logout").status_code == 204
        after = api_client.get("/auth/profile")
        assert after.status_code == 401
        assert after.json()["error"]["code"] == "UNAUTHENTICATED"

    def test_login_wrong_password(self, api_client, db_admin):
        response = api_client.post(
            "/auth/login",
            {"email": "admin@example.com", "password": "nope-nope"},
            format="json",
        )
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    @pytest.mark.parametrize("header", [None, "Bearer", "Bearer not-a-token", "Basic abc"])
    def test_protected_paths_require_token(self, api_client, header):
        if header:
            api_client.credentials(HTTP_AUTHORIZATION=header)
        for path in ("/auth/profile", "/admin/stats", "/customer/apikeys"):
            response = api_client.get(path)
            assert response.status_code == 401
            assert response.json()["error"]["code"] == "UNAUTHENTICATED"

"""
Integration tests for admin endpoints.
"""
from datetime import timedelta

import pytest

from core.domain.clock import utc_now
from credentials.infrastructure.models import Credential as CredentialModel


@pytest.mark.django_db
@pytest.mark.integration
class TestIssuanceAPI:
    """Integration tests for license key issuance."""

    def test_issue_returns_secret_once(self, issue_key, admin_client, customer_client):
        issued = issue_key(ttl_days=30)

        assert issued["apiKey"].startswith("LK-")
        assert issued["apiSecret"]
        stored = CredentialModel.objects.get(id=issued["id"])
        assert stored.secret_hash != issued["apiSecret"]
        assert stored.status == "active"
        assert stored.allowed_domains == []

        for client, path in (
            (admin_client, "/admin/apikeys"),
            (customer_client, "/customer/apikeys"),
            (admin_client, "/admin/logs"),
        ):
            response = client.get(path)
            assert response.status_code == 200
            assert issued["apiSecret"] not in response.content.decode()

    def test_issue_accepts_digit_string(self, issue_key):
        issued = issue_key(ttl_days="15")
        assert issued["expires_at"] is not None

    def test_issue_without_duration_never_expires(
        self, admin_client, db_customer, db_product
    ):
        response = admin_client.post(
            "/admin/create-apikey",
            {"user_id": str(db_customer.id), "product_id": str(db_product.id)},
            format="json",
        )
        assert response.status_code == 201
        assert response.json()["expires_at"] is None

    def test_issue_with_expires_at(self, admin_client, db_customer, db_product):
        expires_at = utc_now() + timedelta(days=6, hours=1)
        response = admin_client.post(
            "/admin/create-apikey",
            {
                "user_id": str(db_customer.id),
                "product_id": str(db_product.id),
                "expires_at": expires_at.isoformat(),
            },
            format="json",
        )
        assert response.status_code == 201
        stored = CredentialModel.objects.get(id=response.json()["id"])
        assert stored.expires_at - stored.created_at == timedelta(days=7)

    @pytest.mark.parametrize("ttl_days", [0, -7, 2.5, True, "soon"])
    def test_invalid_duration(self, admin_client, db_customer, db_product, ttl_days):
        response = admin_client.post(
            "/admin/create-apikey",
            {"user_id": str(db_customer.id), "product_id": str(db_product.id), "ttl_days": ttl_days},
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DURATION"
        assert CredentialModel.objects.count() == 0

    def test_unknown_user(self, admin_client, db_product):
        response = admin_client.post(
            "/admin/create-apikey",
            {
                "user_id": "00000000-0000-0000-0000-000000000000",
                "product_id": str(db_product.id),
                "ttl_days": 7,
            },
            format="json",
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "IDENTITY_NOT_FOUND"

    def test_customer_cannot_issue(self, customer_client, db_customer, db_product):
        response = customer_client.post(
            "/admin/create-apikey",
            {"user_id": str(db_customer.id), "product_id": str(db_product.id), "ttl_days": 7},
            format="json",
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminManagementAPI:
    def test_create_product(self, admin_client, customer_client):
        response = admin_client.post(
            "/admin/create-product",
            {"name": "Site Guard", "slug": "site-guard", "description": "WAF plugin"},
            format="json",
        )
        assert response.status_code == 201
        assert response.json()["slug"] == "site-guard"

        duplicate = admin_client.post(
            "/admin/create-product", {"name": "Other", "slug": "site-guard"}, format="json"
        )
        assert duplicate.status_code == 409

        forbidden = customer_client.post(
            "/admin/create-product", {"name": "Mine", "slug": "mine"}, format="json"
        )
        assert forbidden.status_code == 403

    def test_patch_domains_and_revoke(self, admin_client, issue_key):
        issued = issue_key()

        response = admin_client.patch(
            f"/admin/apikey/{issued['id']}",
            {"allowed_domains": ["Example.com."], "status": "revoked"},
            format="json",
        )

        assert response.status_code == 200
        body = response.json()
        assert body["allowed_domains"] == ["example.com"]
        assert body["status"] == "revoked"
        assert "apiSecret" not in body

    def test_patch_rejects_other_status(self, admin_client, issue_key):
        issued = issue_key()
        response = admin_client.patch(
            f"/admin/apikey/{issued['id']}", {"status": "active"}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_revoke_is_idempotent(self, admin_client, issue_key):
        issued = issue_key()
        first = admin_client.post(f"/admin/apikey/{issued['id']}/revoke")
        second = admin_client.post(f"/admin/apikey/{issued['id']}/revoke")

        assert first.status_code == second.status_code == 200
        assert second.json()["status"] == "revoked"

    def test_revoke_unknown_key(self, admin_client):
        response = admin_client.post("/admin/apikey/00000000-0000-0000-0000-000000000000/revoke")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CREDENTIAL_NOT_FOUND"

    def test_list_all_keys_is_admin_only(self, admin_client, customer_client, issue_key):
        issue_key()
        listed = admin_client.get("/admin/apikeys").json()["data"]
        assert len(listed) == 1
        assert listed[0]["product"]["name"] == "Rank Pro"

        assert customer_client.get("/admin/apikeys").status_code == 403

    def test_stats(self, admin_client, api_client, issue_key):
        issued = issue_key()
        issue_key()
        admin_client.post(f"/admin/apikey/{issued['id']}/revoke")
        api_client.post("/validate", {"api_key": issued["apiKey"]}, format="json")

        stats = admin_client.get("/admin/stats").json()

        assert stats == {
            "total_users": 2,
            "active_api_keys": 1,
            "paid_orders": 0,
            "validations_today": 1,
        }

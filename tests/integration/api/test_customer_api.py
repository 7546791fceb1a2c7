"""
Integration tests for customer endpoints.
"""
import pytest

from credentials.infrastructure.models import Credential as CredentialModel


@pytest.mark.django_db
@pytest.mark.integration
class TestCustomerAPI:
    """Integration tests for the customer self-service API."""

    def test_lists_only_own_keys_and_products(
        self, customer_client, other_customer_client, issue_key, db_other_customer
    ):
        mine = issue_key()
        issue_key(owner=db_other_customer)

        keys = customer_client.get("/customer/apikeys").json()["data"]
        assert [key["id"] for key in keys] == [mine["id"]]
        assert keys[0]["api_key"] == mine["apiKey"]
        assert keys[0]["is_expired"] is False
        assert "apiSecret" not in keys[0]

        products = customer_client.get("/customer/products").json()["data"]
        assert [product["name"] for product in products] == ["Rank Pro"]

    def test_no_keys_means_no_products(self, customer_client, db_product):
        assert customer_client.get("/customer/products").json() == {"data": []}

    def test_update_own_whitelist(self, customer_client, issue_key):
        issued = issue_key()

        response = customer_client.patch(
            f"/customer/apikey/{issued['id']}/domains",
            {"allowed_domains": [" Shop.Example.com ", "shop.example.com", "blog.example.com."]},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["allowed_domains"] == ["blog.example.com", "shop.example.com"]
        assert CredentialModel.objects.get(id=issued["id"]).allowed_domains == [
            "blog.example.com",
            "shop.example.com",
        ]

    def test_invalid_domain_rejected(self, customer_client, issue_key):
        issued = issue_key()
        response = customer_client.patch(
            f"/customer/apikey/{issued['id']}/domains",
            {"allowed_domains": ["not a domain"]},
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DOMAIN"

    def test_blank_entries_do_not_lift_the_restriction(self, customer_client, issue_key):
        issued = issue_key()
        customer_client.patch(
            f"/customer/apikey/{issued['id']}/domains",
            {"allowed_domains": ["example.com"]},
            format="json",
        )

        response = customer_client.patch(
            f"/customer/apikey/{issued['id']}/domains",
            {"allowed_domains": ["  "]},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DOMAIN"
        assert CredentialModel.objects.get(id=issued["id"]).allowed_domains == ["example.com"]

    def test_cannot_edit_someone_elses_key(self, other_customer_client, issue_key):
        issued = issue_key()

        response = other_customer_client.patch(
            f"/customer/apikey/{issued['id']}/domains",
            {"allowed_domains": ["evil.example.com"]},
            format="json",
        )

        assert response.status_code == 403
        assert CredentialModel.objects.get(id=issued["id"]).allowed_domains == []

    def test_unknown_key(self, customer_client):
        response = customer_client.patch(
            "/customer/apikey/00000000-0000-0000-0000-000000000000/domains",
            {"allowed_domains": []},
            format="json",
        )
        assert response.status_code == 404

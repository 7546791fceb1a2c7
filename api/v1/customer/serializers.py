"""
Serializers for customer endpoints (also reused by the admin API).
"""
from rest_framework import serializers


class ProductSerializer(serializers.Serializer):
    """Serializer for ProductDTO."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    slug = serializers.CharField()
    description = serializers.CharField()
    created_at = serializers.DateTimeField()


class CredentialSerializer(serializers.Serializer):
    """
    Serializer for CredentialDTO.

    Read paths never expose the secret.
    """

    id = serializers.UUIDField()
    api_key = serializers.CharField(source="key_string")
    user_id = serializers.UUIDField(source="owner_identity_id")
    product = serializers.SerializerMethodField()
    status = serializers.CharField()
    is_expired = serializers.BooleanField()
    expires_at = serializers.DateTimeField(allow_null=True)
    allowed_domains = serializers.ListField(child=serializers.CharField())
    created_at = serializers.DateTimeField()

    def get_product(self, obj) -> dict:
        return {"id": str(obj.product_id), "name": obj.product_name}


class UpdateAllowedDomainsRequestSerializer(serializers.Serializer):
    """Replacement whitelist; an empty list lifts the domain restriction."""

    allowed_domains = serializers.ListField(
        child=serializers.CharField(allow_blank=True, trim_whitespace=False),
        allow_empty=True,
    )

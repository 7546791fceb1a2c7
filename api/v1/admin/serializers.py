"""
Serializers for admin endpoints.
"""
import math
import re

from rest_framework import serializers

from core.domain.clock import utc_now

DIGITS = re.compile(r"^\s*\d+\s*$")


class CreateApiKeyRequestSerializer(serializers.Serializer):
    """
    Serializer for license key issuance.

    ``ttl_days`` is passed through as given (digit strings become ints) so
    the issuance handler can reject non-positive or fractional durations.
    ``expires_at`` is an alternative: it is rounded up to whole days from
    now. Omitting both issues a non-expiring key.
    """

    user_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    ttl_days = serializers.JSONField(required=False, allow_null=True)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)

    def validate(self, attrs):
        ttl_days = attrs.get("ttl_days")
        expires_at = attrs.pop("expires_at", None)
        if isinstance(ttl_days, str) and DIGITS.match(ttl_days):
            ttl_days = int(ttl_days)
        if ttl_days is None and expires_at is not None:
            remaining = (expires_at - utc_now()).total_seconds()
            ttl_days = math.ceil(remaining / 86400) if remaining > 0 else 0
        attrs["ttl_days"] = ttl_days
        return attrs


class IssuedApiKeySerializer(serializers.Serializer):
    """
    Serializer for IssuedCredentialDTO.

    The only response that ever carries the secret.
    """

    id = serializers.UUIDField()
    apiKey = serializers.CharField(source="key_string")
    apiSecret = serializers.CharField(source="secret")
    user_id = serializers.UUIDField(source="owner_identity_id")
    product_id = serializers.UUIDField()
    expires_at = serializers.DateTimeField(allow_null=True)


class CreateProductRequestSerializer(serializers.Serializer):
    """Serializer for product creation."""

    name = serializers.CharField(max_length=200)
    slug = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, default="")


class UpdateApiKeyRequestSerializer(serializers.Serializer):
    """Admin edit of a license key. Revocation is the only status change."""

    allowed_domains = serializers.ListField(
        child=serializers.CharField(allow_blank=True, trim_whitespace=False),
        allow_empty=True,
        required=False,
    )
    status = serializers.ChoiceField(choices=["revoked"], required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide allowed_domains and/or status.")
        return attrs


class DashboardStatsSerializer(serializers.Serializer):
    """Serializer for DashboardStatsDTO."""

    total_users = serializers.IntegerField()
    active_api_keys = serializers.IntegerField()
    paid_orders = serializers.IntegerField()
    validations_today = serializers.IntegerField()


class ValidationEventSerializer(serializers.Serializer):
    """Serializer for ValidationEventDTO."""

    id = serializers.UUIDField()
    credential_id = serializers.UUIDField(allow_null=True)
    api_key = serializers.CharField()
    ip_address = serializers.CharField()
    domain = serializers.CharField()
    result = serializers.CharField()
    error_code = serializers.CharField()
    timestamp = serializers.DateTimeField()

"""
Serializers for the validation endpoint.
"""
from rest_framework import serializers


class ValidateRequestSerializer(serializers.Serializer):
    """
    Serializer for a validation call.

    Everything except ``api_key`` may be blank; blanks are evaluated (and
    logged) like any other value.
    """

    api_key = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    secret_or_signature = serializers.CharField(
        required=False, allow_blank=True, trim_whitespace=False, default=""
    )
    secret = serializers.CharField(
        required=False, allow_blank=True, trim_whitespace=False, default=""
    )
    domain = serializers.CharField(max_length=253, required=False, allow_blank=True, default="")
    client_ip = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")


class ValidateResponseSerializer(serializers.Serializer):
    """Serializer for ValidationResultDTO."""

    valid = serializers.BooleanField()
    error_code = serializers.CharField()

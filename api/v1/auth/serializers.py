"""
Serializers for authentication endpoints.
"""
from rest_framework import serializers


class LoginRequestSerializer(serializers.Serializer):
    """Serializer for login request."""

    email = serializers.CharField(max_length=254)
    password = serializers.CharField(trim_whitespace=False)


class RegisterRequestSerializer(serializers.Serializer):
    """Serializer for self-service registration."""

    email = serializers.CharField(max_length=254)
    password = serializers.CharField(trim_whitespace=False)
    full_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")


class IdentitySerializer(serializers.Serializer):
    """Serializer for IdentityDTO."""

    id = serializers.UUIDField()
    email = serializers.CharField()
    full_name = serializers.CharField()
    role = serializers.CharField()
    created_at = serializers.DateTimeField()


class LoginResponseSerializer(serializers.Serializer):
    """Serializer for LoginResponseDTO."""

    token = serializers.CharField()
    expires_at = serializers.DateTimeField()
    user = IdentitySerializer()


class RegisterResponseSerializer(serializers.Serializer):
    user = IdentitySerializer()

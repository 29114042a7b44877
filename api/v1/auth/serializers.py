"""
Serializers for authentication endpoints.
"""

from rest_framework import serializers


class SignupRequestSerializer(serializers.Serializer):
    """Serializer for signup request."""

    username = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    email = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    password = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )
    licenseKey = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class LoginRequestSerializer(serializers.Serializer):
    """Serializer for login request."""

    email = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    password = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )


class MessageResponseSerializer(serializers.Serializer):
    """Serializer for a plain success message."""

    success = serializers.BooleanField()
    message = serializers.CharField()


class UserSerializer(serializers.Serializer):
    """Serializer for UserDTO."""

    id = serializers.UUIDField()
    email = serializers.EmailField()
    username = serializers.CharField()


class LoginResponseSerializer(MessageResponseSerializer):
    """Serializer for login response."""

    token = serializers.CharField()
    user = UserSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    """Serializer for error responses."""

    success = serializers.BooleanField(default=False)
    message = serializers.CharField()
    code = serializers.CharField()

"""
Serializers for account settings endpoints.
"""

from rest_framework import serializers


class ChangePasswordRequestSerializer(serializers.Serializer):
    """Serializer for change password request."""

    currentPassword = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )
    newPassword = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )
    confirmPassword = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )


class ApiKeyResponseSerializer(serializers.Serializer):
    """Serializer for API key responses."""

    success = serializers.BooleanField()
    apiKey = serializers.CharField(allow_null=True)
    message = serializers.CharField(required=False)


class DiscordSettingsSerializer(serializers.Serializer):
    """Serializer for Discord settings requests."""

    webhookUrl = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    notificationsEnabled = serializers.BooleanField(required=False, default=False)


class DiscordSettingsResponseSerializer(DiscordSettingsSerializer):
    """Serializer for Discord settings response."""

    success = serializers.BooleanField()


class TestWebhookRequestSerializer(serializers.Serializer):
    """Serializer for test webhook request."""

    webhookUrl = serializers.CharField(required=False, allow_blank=True, allow_null=True)

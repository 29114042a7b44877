"""
Serializers for license endpoints.
"""

from rest_framework import serializers


class ExtendLicenseRequestSerializer(serializers.Serializer):
    """Serializer for extend license request."""

    licenseKey = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class LicenseInfoSerializer(serializers.Serializer):
    """Serializer for LicenseInfoDTO."""

    expiresAt = serializers.DateTimeField(source="expires_at", allow_null=True)
    planType = serializers.CharField(source="plan_type")


class LicenseInfoResponseSerializer(serializers.Serializer):
    """Serializer for license info response."""

    success = serializers.BooleanField()
    license = LicenseInfoSerializer(allow_null=True)


class ExtendLicenseResponseSerializer(serializers.Serializer):
    """Serializer for LicenseExtensionDTO."""

    expiresAt = serializers.DateTimeField(source="expires_at")
    daysAdded = serializers.IntegerField(source="days_added")
    message = serializers.CharField()

"""
Django admin configuration for accounts app.
"""
from django.contrib import admin

from accounts.infrastructure.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin interface for dashboard users."""

    list_display = [
        "username",
        "email",
        "license",
        "discord_notifications_enabled",
        "created_at",
    ]
    list_filter = ["discord_notifications_enabled", "created_at"]
    search_fields = ["username", "email", "license__license_key"]
    readonly_fields = ["id", "password_hash", "api_key", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "username", "email", "password_hash"),
            },
        ),
        (
            "License",
            {
                "fields": ("license",),
            },
        ),
        (
            "Integrations",
            {
                "fields": ("api_key", "discord_webhook_url", "discord_notifications_enabled"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("license")

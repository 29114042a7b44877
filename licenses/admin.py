"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from licenses.infrastructure.models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "plan_type",
        "user",
        "status_display",
        "expires_at",
        "created_at",
    ]
    list_filter = ["plan_type", "expires_at", "created_at"]
    search_fields = ["license_key", "user__username", "user__email"]
    readonly_fields = ["id", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license_key", "plan_type"),
            },
        ),
        (
            "Ownership",
            {
                "fields": ("user", "expires_at"),
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

    def status_display(self, obj):
        """Display claim status with color coding."""
        if obj.user_id is None:
            label, color = "UNCLAIMED", "gray"
        elif obj.expires_at is None:
            label, color = "NO EXPIRY", "orange"
        elif obj.expires_at <= timezone.now():
            label, color = "EXPIRED", "red"
        else:
            label, color = "ACTIVE", "green"
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            label,
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("user")

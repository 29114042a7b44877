"""
Django admin configuration for scan_tasks app.
"""
from django.contrib import admin

from scan_tasks.infrastructure.models import ScanTask


@admin.register(ScanTask)
class ScanTaskAdmin(admin.ModelAdmin):
    """Admin interface for ScanTask model."""

    list_display = ["task_id", "title", "user", "status", "progress", "threads", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["task_id", "title", "user__username", "machine_name"]
    readonly_fields = ["id", "task_id", "created_at", "updated_at"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("user")

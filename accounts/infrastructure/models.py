"""
User model.

Dashboard users are their own table and do not use ``django.contrib.auth``.
"""
import uuid

from django.db import models


class User(models.Model):
    """A dashboard user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(unique=True)
    password_hash = models.CharField(max_length=255)
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="active_users",
    )
    api_key = models.CharField(max_length=64, null=True, blank=True, unique=True)
    discord_webhook_url = models.URLField(max_length=500, null=True, blank=True)
    discord_notifications_enabled = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]

    def __str__(self):
        return self.username

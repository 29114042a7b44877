"""
License model.
"""
import secrets
import string
import uuid

from django.core.exceptions import ValidationError
from django.db import models

DEFAULT_KEY_PREFIX = "SQLB"


def generate_license_key(prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """
    Generate a license key in format: PREFIX-XXXX-XXXX-XXXX-XXXX.

    Args:
        prefix: Key prefix

    Returns:
        Generated license key string
    """
    chars = string.ascii_uppercase + string.digits
    parts = ["".join(secrets.choice(chars) for _ in range(4)) for _ in range(4)]
    return f"{prefix}-{'-'.join(parts)}"


class License(models.Model):
    """
    A pre-seeded license key.

    ``user`` is null until the key is claimed at signup or redeemed
    as an extension.
    """

    PLAN_CHOICES = [
        ("30d", "30 days"),
        ("90d", "90 days"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_key = models.CharField(max_length=100, unique=True, db_index=True)
    user = models.ForeignKey(
        "accounts.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="claimed_licenses",
    )
    plan_type = models.CharField(max_length=10, choices=PLAN_CHOICES, default="30d")
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user"]),
        ]

    def __str__(self):
        return self.license_key

    def clean(self):
        """A claimed license needs an expiry."""
        super().clean()
        if self.user_id is not None and self.expires_at is None:
            raise ValidationError({"expires_at": "A claimed license must have an expiry date."})

    def save(self, *args, **kwargs):
        """Generate a license key on first save."""
        if not self.license_key:
            self.license_key = generate_license_key()
        super().save(*args, **kwargs)

"""
Scan task model.
"""
import uuid

from django.db import models


class ScanTask(models.Model):
    """A scan task configured by a dashboard user."""

    STATUS_CHOICES = [
        ("Running", "Running"),
        ("Paused", "Paused"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey("accounts.User", on_delete=models.CASCADE, related_name="tasks")
    task_id = models.CharField(max_length=20)
    title = models.CharField(max_length=255)
    list_file = models.CharField(max_length=255)
    proxies_file = models.CharField(max_length=255, null=True, blank=True)
    machine_id = models.CharField(max_length=100, null=True, blank=True)
    machine_name = models.CharField(max_length=255, null=True, blank=True)
    machine_ip = models.CharField(max_length=45, null=True, blank=True)
    threads = models.PositiveIntegerField(default=50)
    timeout = models.CharField(max_length=20, default="5s")
    start_from = models.CharField(max_length=255, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="Running")
    progress = models.PositiveSmallIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tasks"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "-created_at"]),
        ]

    def __str__(self):
        return f"{self.task_id} {self.title}"

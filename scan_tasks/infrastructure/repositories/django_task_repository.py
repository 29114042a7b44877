"""
Django implementation of ScanTaskRepository port.
"""
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import DatabaseError

from core.domain.exceptions import DependencyError
from core.domain.value_objects import TaskStatus
from scan_tasks.domain.task import ScanTask
from scan_tasks.infrastructure.models import ScanTask as ScanTaskModel
from scan_tasks.ports.task_repository import ScanTaskRepository


class DjangoScanTaskRepository(ScanTaskRepository):
    """Django ORM implementation of ScanTaskRepository."""

    def _to_domain(self, model: ScanTaskModel) -> ScanTask:
        """
        Convert Django model to domain entity.

        Args:
            model: Django ScanTask model

        Returns:
            ScanTask domain entity
        """
        return ScanTask(
            id=model.id,
            user_id=model.user_id,
            task_id=model.task_id,
            title=model.title,
            list_file=model.list_file,
            proxies_file=model.proxies_file,
            machine_id=model.machine_id,
            machine_name=model.machine_name,
            machine_ip=model.machine_ip,
            threads=model.threads,
            timeout=model.timeout,
            start_from=model.start_from,
            status=TaskStatus(model.status),
            progress=model.progress,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, task: ScanTask) -> ScanTaskModel:
        """
        Convert domain entity to Django model.

        Args:
            task: ScanTask domain entity

        Returns:
            Django ScanTask model
        """
        model, created = ScanTaskModel.objects.get_or_create(
            id=task.id,
            defaults={
                "user_id": task.user_id,
                "task_id": task.task_id,
                "title": task.title,
                "list_file": task.list_file,
                "proxies_file": task.proxies_file,
                "machine_id": task.machine_id,
                "machine_name": task.machine_name,
                "machine_ip": task.machine_ip,
                "threads": task.threads,
                "timeout": task.timeout,
                "start_from": task.start_from,
                "status": task.status.value,
                "progress": task.progress,
            },
        )
        if not created:
            model.status = task.status.value
            model.progress = task.progress
        return model

    @sync_to_async
    def save(self, task: ScanTask) -> ScanTask:
        """
        Save a task entity.

        Args:
            task: ScanTask entity to save

        Returns:
            Saved task entity
        """
        try:
            model = self._to_model(task)
            model.save()
        except DatabaseError as e:
            raise DependencyError("Failed to save task.") from e
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, task_id: uuid.UUID) -> Optional[ScanTask]:
        try:
            return self._to_domain(ScanTaskModel.objects.get(id=task_id))
        except ScanTaskModel.DoesNotExist:
            return None
        except DatabaseError as e:
            raise DependencyError("Failed to load task.") from e

    @sync_to_async
    def list_for_user(self, user_id: uuid.UUID) -> List[ScanTask]:
        try:
            models = ScanTaskModel.objects.filter(user_id=user_id).order_by("-created_at")
            return [self._to_domain(model) for model in models]
        except DatabaseError as e:
            raise DependencyError("Failed to fetch tasks.") from e

    @sync_to_async
    def delete(self, task_id: uuid.UUID, user_id: uuid.UUID) -> None:
        try:
            ScanTaskModel.objects.filter(id=task_id, user_id=user_id).delete()
        except DatabaseError as e:
            raise DependencyError("Failed to delete task.") from e

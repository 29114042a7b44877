"""
Scan task repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from scan_tasks.domain.task import ScanTask


class ScanTaskRepository(ABC):
    """Abstract repository for ScanTask entities."""

    @abstractmethod
    async def save(self, task: ScanTask) -> ScanTask:
        """
        Save a task entity.

        Args:
            task: ScanTask entity to save

        Returns:
            Saved task entity
        """

    @abstractmethod
    async def find_by_id(self, task_id: uuid.UUID) -> Optional[ScanTask]:
        """
        Find a task by ID.

        Args:
            task_id: Task UUID

        Returns:
            ScanTask entity or None if not found
        """

    @abstractmethod
    async def list_for_user(self, user_id: uuid.UUID) -> List[ScanTask]:
        """
        List a user's tasks, newest first.

        Args:
            user_id: Owner UUID

        Returns:
            List of ScanTask entities
        """

    @abstractmethod
    async def delete(self, task_id: uuid.UUID, user_id: uuid.UUID) -> None:
        """
        Delete a task owned by ``user_id``.

        Args:
            task_id: Task UUID
            user_id: Owner UUID
        """

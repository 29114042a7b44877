"""
Scan task domain events.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from core.domain.events import DomainEvent


class TaskCreated(DomainEvent):
    """Event raised when a user creates a scan task."""

    def __init__(
        self,
        task_id: uuid.UUID,
        user_id: uuid.UUID,
        display_id: str,
        title: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize TaskCreated event.

        Args:
            task_id: Task UUID
            user_id: Owner UUID
            display_id: Short ``T-`` id
            title: Task name
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(task_id),
            event_type="TaskCreated",
        )
        self.task_id = task_id
        self.user_id = user_id
        self.display_id = display_id
        self.title = title


class TaskStatusChanged(DomainEvent):
    """Event raised when a task is paused or resumed."""

    def __init__(
        self,
        task_id: uuid.UUID,
        user_id: uuid.UUID,
        display_id: str,
        title: str,
        old_status: str,
        new_status: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(task_id),
            event_type="TaskStatusChanged",
        )
        self.task_id = task_id
        self.user_id = user_id
        self.display_id = display_id
        self.title = title
        self.old_status = old_status
        self.new_status = new_status


class TaskDeleted(DomainEvent):
    """Event raised when a task is deleted."""

    def __init__(
        self,
        task_id: uuid.UUID,
        user_id: uuid.UUID,
        display_id: str,
        title: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(task_id),
            event_type="TaskDeleted",
        )
        self.task_id = task_id
        self.user_id = user_id
        self.display_id = display_id
        self.title = title

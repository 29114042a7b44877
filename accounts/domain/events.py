"""
Account domain events.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from core.domain.events import DomainEvent


class UserRegistered(DomainEvent):
    """Event raised when a user signs up."""

    def __init__(
        self,
        user_id: uuid.UUID,
        username: str,
        license_id: uuid.UUID,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize UserRegistered event.

        Args:
            user_id: New user UUID
            username: Username
            license_id: License claimed at signup
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(user_id),
            event_type="UserRegistered",
        )
        self.user_id = user_id
        self.username = username
        self.license_id = license_id

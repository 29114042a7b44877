"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from core.domain.events import DomainEvent


class LicenseClaimed(DomainEvent):
    """Event raised when an unclaimed license is bound to a new user at signup."""

    def __init__(
        self,
        license_id: uuid.UUID,
        user_id: uuid.UUID,
        plan_type: str,
        expires_at: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseClaimed event.

        Args:
            license_id: License UUID
            user_id: Claiming user UUID
            plan_type: Plan tier of the claimed license
            expires_at: Expiry set by the claim
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_id),
            event_type="LicenseClaimed",
        )
        self.license_id = license_id
        self.user_id = user_id
        self.plan_type = plan_type
        self.expires_at = expires_at


class LicenseExtended(DomainEvent):
    """Event raised when a user redeems a new key to extend access."""

    def __init__(
        self,
        license_id: uuid.UUID,
        user_id: uuid.UUID,
        plan_type: str,
        expires_at: datetime,
        days_added: int,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseExtended event.

        Args:
            license_id: Newly assigned license UUID
            user_id: User UUID
            plan_type: Plan tier of the redeemed license
            expires_at: New expiry
            days_added: Days granted by the plan
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=str(license_id),
            event_type="LicenseExtended",
        )
        self.license_id = license_id
        self.user_id = user_id
        self.plan_type = plan_type
        self.expires_at = expires_at
        self.days_added = days_added

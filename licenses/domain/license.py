"""
License domain entity.

A license is a pre-seeded key granting a fixed number of days of access.
It starts unclaimed and is claimed by exactly one user.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import PlanType


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    ``user_id`` is the exclusivity flag: ``None`` means unclaimed.
    Claims made through the ledger always set ``expires_at``; rows
    claimed elsewhere may lack one and are then never active.
    ``plan_name`` keeps the stored plan string when it is not a known tier.
    """

    id: uuid.UUID
    license_key: str
    plan_type: PlanType
    user_id: Optional[uuid.UUID]
    expires_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    plan_name: Optional[str] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.license_key:
            raise ValueError("License key is required")

    @classmethod
    def create(
        cls,
        license_key: str,
        plan_type: PlanType = PlanType.THIRTY_DAYS,
        license_id: Optional[uuid.UUID] = None,
        created_at: Optional[datetime] = None,
    ) -> "License":
        """
        Create a new unclaimed License entity.

        Args:
            license_key: Printable license key
            plan_type: Plan tier
            license_id: Optional UUID (generated if not provided)
            created_at: Creation time (defaults to now)

        Returns:
            License entity instance
        """
        now = created_at or datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            license_key=license_key,
            plan_type=plan_type,
            user_id=None,
            expires_at=None,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_claimed(self) -> bool:
        return self.user_id is not None

    @property
    def plan_label(self) -> str:
        """Plan as stored, for display."""
        return self.plan_name or self.plan_type.value

    def is_active(self, current_time: datetime) -> bool:
        """
        Check if the license grants access at ``current_time``.

        Args:
            current_time: Reference time

        Returns:
            True if claimed and not yet expired
        """
        return (
            self.is_claimed
            and self.expires_at is not None
            and self.expires_at > current_time
        )

    def claimed_by(self, user_id: uuid.UUID, expires_at: datetime) -> "License":
        """Return a copy bound to ``user_id`` until ``expires_at``."""
        return replace(self, user_id=user_id, expires_at=expires_at)

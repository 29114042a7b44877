"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class LicenseInfoDTO:
    """DTO for the license-info response."""

    expires_at: Optional[datetime]
    plan_type: str


@dataclass
class LicenseExtensionDTO:
    """DTO for the extend-license response."""

    license_id: uuid.UUID
    expires_at: datetime
    days_added: int
    plan_type: str

    @property
    def message(self) -> str:
        return (
            "License extended successfully. "
            f"Your license now expires on {self.expires_at.strftime('%Y-%m-%d')}."
        )

"""
License holder port.

The ledger reads and moves a user's active-license pointer through this
port. The accounts app provides the implementation.
"""
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LicenseHolder:
    """A user as seen by the license ledger."""

    user_id: uuid.UUID
    license_id: Optional[uuid.UUID]


class LicenseHolderRepository(ABC):
    """Abstract access to users' license pointers."""

    @abstractmethod
    async def find_holder(self, user_id: uuid.UUID) -> Optional[LicenseHolder]:
        """
        Read a user's current license pointer.

        Args:
            user_id: User UUID

        Returns:
            LicenseHolder or None if the user does not exist
        """

    @abstractmethod
    async def assign_license(self, user_id: uuid.UUID, license_id: uuid.UUID) -> None:
        """
        Point a user at a license.

        Args:
            user_id: User UUID
            license_id: License UUID
        """

"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its printable key (exact, case-sensitive match).

        Args:
            license_key: License key string

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def claim(
        self, license_id: uuid.UUID, user_id: uuid.UUID, expires_at: datetime
    ) -> bool:
        """
        Bind an unclaimed license to a user in one conditional write.

        The write only applies while the row's ``user_id`` is still null.

        Args:
            license_id: License UUID
            user_id: Claiming user UUID
            expires_at: Expiry to store with the claim

        Returns:
            True if this call claimed the row, False if another request won
        """

    @abstractmethod
    async def release(self, license_id: uuid.UUID) -> None:
        """
        Clear a license's owner.

        Args:
            license_id: License UUID
        """

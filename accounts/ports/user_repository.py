"""
User repository port (interface).

This defines the contract for user persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from accounts.domain.user import User


class UserRepository(ABC):
    """Abstract repository for User entities."""

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Insert a new user row.

        Args:
            user: User entity to insert

        Returns:
            Saved user entity

        Raises:
            ConflictError: If the username or email is taken
        """

    @abstractmethod
    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """
        Find a user by ID.

        Args:
            user_id: User UUID

        Returns:
            User entity or None if not found
        """

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by normalized email.

        Args:
            email: Lower-cased email

        Returns:
            User entity or None if not found
        """

    @abstractmethod
    async def username_exists(self, username: str) -> bool:
        """Check whether a username is taken."""

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        """Check whether an email is registered."""

    @abstractmethod
    async def delete(self, user_id: uuid.UUID) -> None:
        """
        Delete a user row.

        Args:
            user_id: User UUID
        """

    @abstractmethod
    async def update_password(self, user_id: uuid.UUID, password_hash: str) -> None:
        """Store a new password hash."""

    @abstractmethod
    async def set_api_key(self, user_id: uuid.UUID, api_key: str) -> bool:
        """
        Store a new API key.

        Returns:
            True if the user row was updated
        """

    @abstractmethod
    async def update_discord_settings(
        self, user_id: uuid.UUID, webhook_url: Optional[str], notifications_enabled: bool
    ) -> bool:
        """
        Store Discord notification settings.

        Returns:
            True if the user row was updated
        """

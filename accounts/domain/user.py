"""
User domain entity.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional


def normalize_username(username: Optional[str]) -> str:
    return (username or "").strip()


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


@dataclass(frozen=True)
class User:
    """
    User domain entity.

    ``license_id`` points at the user's currently active license.
    """

    id: uuid.UUID
    username: str
    email: str
    password_hash: str
    license_id: Optional[uuid.UUID]
    api_key: Optional[str]
    discord_webhook_url: Optional[str]
    discord_notifications_enabled: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate user entity."""
        if not self.username:
            raise ValueError("Username is required")
        if not self.email:
            raise ValueError("Email is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")

    @classmethod
    def create(
        cls,
        username: str,
        email: str,
        password_hash: str,
        license_id: Optional[uuid.UUID] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> "User":
        """
        Create a new User entity.

        Args:
            username: Username (trimmed)
            email: Email (trimmed and lower-cased)
            password_hash: Encoded password hash
            license_id: License the user signs up with
            user_id: Optional UUID (generated if not provided)

        Returns:
            User entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=user_id or uuid.uuid4(),
            username=normalize_username(username),
            email=normalize_email(email),
            password_hash=password_hash,
            license_id=license_id,
            api_key=None,
            discord_webhook_url=None,
            discord_notifications_enabled=False,
            created_at=now,
            updated_at=now,
        )

    @property
    def wants_discord_notifications(self) -> bool:
        return self.discord_notifications_enabled and bool(self.discord_webhook_url)

    def with_password(self, password_hash: str) -> "User":
        return replace(self, password_hash=password_hash)

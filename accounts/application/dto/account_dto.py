"""
Account DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class UserDTO:
    """Public view of a user."""

    id: uuid.UUID
    email: str
    username: str


@dataclass
class LoginResultDTO:
    """DTO for a successful login."""

    token: str
    user: UserDTO


@dataclass
class DiscordSettingsDTO:
    """DTO for Discord notification settings."""

    webhook_url: str
    notifications_enabled: bool


@dataclass
class ApiKeyDTO:
    """DTO for the API key endpoints."""

    api_key: Optional[str]

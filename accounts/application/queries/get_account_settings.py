"""
Account settings queries.
"""
import uuid
from dataclasses import dataclass


@dataclass
class GetApiKeyQuery:
    """Query for the signed-in user's API key."""

    user_id: uuid.UUID


@dataclass
class GetDiscordSettingsQuery:
    """Query for the signed-in user's Discord settings."""

    user_id: uuid.UUID

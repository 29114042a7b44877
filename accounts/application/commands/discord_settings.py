"""
Discord commands.

Commands to save notification settings and to send a test message.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class UpdateDiscordSettingsCommand:
    """Command to save the signed-in user's Discord settings."""

    user_id: uuid.UUID
    webhook_url: Optional[str]
    notifications_enabled: bool


@dataclass
class SendTestWebhookCommand:
    """Command to post a test message to a Discord webhook."""

    webhook_url: Optional[str]

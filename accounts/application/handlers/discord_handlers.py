"""
Discord settings handlers.

Save and read a user's webhook settings, and post a test message.
"""
import logging

from asgiref.sync import sync_to_async

from accounts.application.commands.discord_settings import (
    SendTestWebhookCommand,
    UpdateDiscordSettingsCommand,
)
from accounts.application.dto.account_dto import DiscordSettingsDTO
from accounts.application.queries.get_account_settings import GetDiscordSettingsQuery
from accounts.ports.user_repository import UserRepository
from core.domain.exceptions import UserNotFoundError, ValidationError
from core.domain.value_objects import DiscordWebhookUrl
from core.infrastructure.discord import DiscordWebhookClient

logger = logging.getLogger(__name__)


def validate_webhook_url(webhook_url: str) -> str:
    """
    Validate a Discord webhook URL.

    Raises:
        ValidationError: If the URL is malformed or not a Discord webhook
    """
    try:
        return str(DiscordWebhookUrl(webhook_url))
    except ValueError as e:
        raise ValidationError(str(e)) from e


class GetDiscordSettingsHandler:
    """Handler for GetDiscordSettingsQuery."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, query: GetDiscordSettingsQuery) -> DiscordSettingsDTO:
        """
        Handle get Discord settings query.

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        user = await self.user_repository.find_by_id(query.user_id)
        if user is None:
            raise UserNotFoundError()
        return DiscordSettingsDTO(
            webhook_url=user.discord_webhook_url or "",
            notifications_enabled=bool(user.discord_notifications_enabled),
        )


class UpdateDiscordSettingsHandler:
    """Handler for UpdateDiscordSettingsCommand."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, command: UpdateDiscordSettingsCommand) -> None:
        """
        Handle update Discord settings command.

        The URL is only validated when notifications are enabled.
        An empty URL is stored as null.

        Raises:
            ValidationError: If an enabled URL is not a Discord webhook
            UserNotFoundError: If the user no longer exists
        """
        webhook_url = (command.webhook_url or "").strip()
        enabled = bool(command.notifications_enabled)

        if enabled and webhook_url:
            validate_webhook_url(webhook_url)

        updated = await self.user_repository.update_discord_settings(
            command.user_id, webhook_url or None, enabled
        )
        if not updated:
            raise UserNotFoundError()
        logger.info(
            "Discord settings saved",
            extra={"user_id": str(command.user_id), "notifications_enabled": enabled},
        )


class SendTestWebhookHandler:
    """Handler for SendTestWebhookCommand."""

    def __init__(self, client: DiscordWebhookClient = None):
        self.client = client or DiscordWebhookClient()

    async def handle(self, command: SendTestWebhookCommand) -> None:
        """
        Post the static test message.

        Raises:
            ValidationError: If the URL is missing or invalid
            WebhookRejectedError: If Discord answers with a non-2xx status
            WebhookDeliveryError: If the request could not be made
        """
        webhook_url = (command.webhook_url or "").strip()
        if not webhook_url:
            raise ValidationError("Webhook URL is required.")
        validate_webhook_url(webhook_url)

        await sync_to_async(self.client.send, thread_sensitive=False)(
            webhook_url, self.client.build_test_payload()
        )

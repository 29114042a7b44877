"""
Discord webhook delivery.

Posts notification payloads to a user's Discord webhook URL.
"""
import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings
from django.utils import timezone

from core.domain.exceptions import WebhookDeliveryError, WebhookRejectedError

logger = logging.getLogger(__name__)

TEST_EMBED_COLOR = 0x00FF00
NOTIFICATION_EMBED_COLOR = 0x5865F2


class DiscordWebhookClient:
    """Client for posting messages to Discord webhooks."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout or getattr(settings, "DISCORD_WEBHOOK_TIMEOUT", 10)

    @staticmethod
    def build_test_payload() -> Dict[str, Any]:
        """Static payload sent by the "test webhook" action."""
        return {
            "content": (
                "✅ **Test Notification**\n\n"
                "This is a test message from SQLBots Dashboard. "
                "Your webhook is working correctly!"
            ),
            "embeds": [
                {
                    "title": "Webhook Test",
                    "description": "Your Discord webhook integration is successfully configured.",
                    "color": TEST_EMBED_COLOR,
                    "timestamp": timezone.now().isoformat(),
                }
            ],
        }

    @staticmethod
    def build_event_payload(title: str, description: str) -> Dict[str, Any]:
        """
        Build an embed payload for a domain notification.

        Args:
            title: Embed title
            description: Embed body

        Returns:
            Discord webhook JSON payload
        """
        return {
            "embeds": [
                {
                    "title": title,
                    "description": description,
                    "color": NOTIFICATION_EMBED_COLOR,
                    "timestamp": timezone.now().isoformat(),
                    "footer": {"text": "SQLBots Dashboard"},
                }
            ],
        }

    def send(self, url: str, payload: Dict[str, Any]) -> None:
        """
        Post a payload to a Discord webhook.

        Args:
            url: Webhook URL
            payload: JSON payload

        Raises:
            WebhookRejectedError: If Discord answers with a non-2xx status
            WebhookDeliveryError: If the request could not be made
        """
        try:
            response = requests.post(
                url,
                json=payload,
                headers={"User-Agent": "SQLBots-Dashboard-Webhook/1.0"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Discord webhook delivery failed: {e}")
            raise WebhookDeliveryError() from e

        if not 200 <= response.status_code < 300:
            logger.warning(
                "Discord webhook rejected message",
                extra={"status_code": response.status_code, "reason": response.reason},
            )
            raise WebhookRejectedError(
                f"Discord webhook returned an error: {response.status_code} {response.reason}"
            )

        logger.info("Discord webhook delivered", extra={"status_code": response.status_code})

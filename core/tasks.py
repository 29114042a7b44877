"""
Celery tasks for background processing.

Discord notifications are delivered outside the request cycle.
"""
import logging

from SQLBotsDashboard.celery import app

from core.domain.exceptions import WebhookDeliveryError, WebhookRejectedError
from core.infrastructure.discord import DiscordWebhookClient
from core.metrics import discord_notifications_total

logger = logging.getLogger(__name__)


@app.task(bind=True, max_retries=3)
def send_discord_notification_task(self, webhook_url: str, title: str, description: str):
    """
    Celery task for Discord notification delivery.

    Transport failures are retried with exponential backoff. A rejection
    from Discord is final.

    Args:
        webhook_url: Discord webhook URL
        title: Embed title
        description: Embed body
    """
    client = DiscordWebhookClient()
    payload = client.build_event_payload(title, description)

    try:
        client.send(webhook_url, payload)
    except WebhookRejectedError as exc:
        discord_notifications_total.labels(outcome="rejected").inc()
        logger.error(f"Discord notification rejected: {exc.message}")
        return False
    except WebhookDeliveryError as exc:
        discord_notifications_total.labels(outcome="retry").inc()
        logger.error(f"Discord notification failed: {exc.message}", exc_info=True)
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)

    discord_notifications_total.labels(outcome="delivered").inc()
    return True

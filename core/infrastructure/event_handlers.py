"""
Event handlers for domain events.

These handlers process domain events for side effects like audit
logging, business metrics and Discord notifications.
"""

import logging

from core.domain.events import DomainEvent, EventHandler
from core.metrics import (
    licenses_claimed_total,
    licenses_extended_total,
    scan_tasks_total,
    users_registered_total,
)

from accounts.domain.events import UserRegistered
from licenses.domain.events import LicenseClaimed, LicenseExtended
from scan_tasks.domain.events import TaskCreated, TaskDeleted, TaskStatusChanged

logger = logging.getLogger(__name__)


class AuditLogEventHandler(EventHandler):
    """Writes every domain event to the audit logger."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


class MetricsEventHandler(EventHandler):
    """Counts business events in Prometheus."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, UserRegistered):
            users_registered_total.inc()
        elif isinstance(event, LicenseClaimed):
            licenses_claimed_total.labels(plan_type=event.plan_type, source="signup").inc()
        elif isinstance(event, LicenseExtended):
            licenses_claimed_total.labels(plan_type=event.plan_type, source="extension").inc()
            licenses_extended_total.labels(plan_type=event.plan_type).inc()
        elif isinstance(event, TaskCreated):
            scan_tasks_total.labels(action="created").inc()
        elif isinstance(event, TaskStatusChanged):
            scan_tasks_total.labels(action=event.new_status.lower()).inc()
        elif isinstance(event, TaskDeleted):
            scan_tasks_total.labels(action="deleted").inc()


class DiscordNotificationHandler(EventHandler):
    """
    Queues a Discord notification for users who enabled them.

    Delivery runs in a Celery task; this handler only looks up the
    user's settings and enqueues.
    """

    def __init__(self, user_repository=None):
        self._user_repository = user_repository

    @property
    def user_repository(self):
        if self._user_repository is None:
            from accounts.infrastructure.repositories.django_user_repository import (
                DjangoUserRepository,
            )

            self._user_repository = DjangoUserRepository()
        return self._user_repository

    def describe(self, event: DomainEvent):
        """
        Build the notification title and body for an event.

        Returns:
            (title, description) or None when the event is not notified
        """
        if isinstance(event, LicenseExtended):
            return (
                "License Extended",
                f"Your license was extended by {event.days_added} days. "
                f"It now expires on {event.expires_at.strftime('%Y-%m-%d')}.",
            )
        if isinstance(event, TaskCreated):
            return ("Task Created", f"Task **{event.title}** ({event.display_id}) is running.")
        if isinstance(event, TaskStatusChanged):
            return (
                "Task Status Changed",
                f"Task **{event.title}** ({event.display_id}) changed from "
                f"{event.old_status} to {event.new_status}.",
            )
        if isinstance(event, TaskDeleted):
            return ("Task Deleted", f"Task **{event.title}** ({event.display_id}) was deleted.")
        return None

    async def handle(self, event: DomainEvent) -> None:
        """
        Enqueue a notification for the event's user.

        Args:
            event: Domain event carrying a ``user_id``
        """
        from core.tasks import send_discord_notification_task

        message = self.describe(event)
        if message is None:
            return

        user = await self.user_repository.find_by_id(event.user_id)
        if user is None or not user.wants_discord_notifications:
            return

        title, description = message
        send_discord_notification_task.delay(user.discord_webhook_url, title, description)
        logger.debug(
            "Discord notification queued",
            extra={"event_type": event.event_type, "user_id": str(event.user_id)},
        )


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    discord_handler = DiscordNotificationHandler()

    event_bus.subscribe(DomainEvent, AuditLogEventHandler())
    event_bus.subscribe(DomainEvent, MetricsEventHandler())

    for event_type in (LicenseExtended, TaskCreated, TaskStatusChanged, TaskDeleted):
        event_bus.subscribe(event_type, discord_handler)

    logger.info("Event handlers registered")

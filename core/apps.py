"""
App configuration for the core app.
"""

import logging
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

# Management commands that never serve requests
SKIP_SETUP_COMMANDS = {
    "migrate",
    "makemigrations",
    "collectstatic",
    "check",
    "createsuperuser",
}


class CoreConfig(AppConfig):
    """App configuration for core."""

    name = "core"
    verbose_name = "SQLBots Core"

    def ready(self):
        """Register event handlers and observability once apps are loaded."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

        if len(sys.argv) > 1 and sys.argv[1] in SKIP_SETUP_COMMANDS:
            return

        if getattr(settings, "OTEL_ENABLED", False):
            try:
                from core.instrumentation import setup_opentelemetry

                setup_opentelemetry()
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error("Failed to setup OpenTelemetry: %s", e, exc_info=True)

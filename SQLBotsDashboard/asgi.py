"""
ASGI config for SQLBotsDashboard project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "SQLBotsDashboard.settings.prod")

application = get_asgi_application()

"""
WSGI config for SQLBotsDashboard project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "SQLBotsDashboard.settings.prod")

application = get_wsgi_application()

"""
URL configuration for account settings endpoints.
"""

from django.urls import path

from api.v1.account import views

urlpatterns = [
    path("change-password", views.ChangePasswordView.as_view(), name="change-password"),
    path("api-key", views.ApiKeyView.as_view(), name="api-key"),
    path("discord-settings", views.DiscordSettingsView.as_view(), name="discord-settings"),
    path(
        "test-discord-webhook",
        views.TestDiscordWebhookView.as_view(),
        name="test-discord-webhook",
    ),
]

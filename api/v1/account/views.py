"""
Account settings API views.

All endpoints require a signed-in user:
- Change password
- Read and regenerate the API key
- Read and save Discord notification settings
- Send a Discord test message
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.change_password import ChangePasswordCommand
from accounts.application.commands.discord_settings import (
    SendTestWebhookCommand,
    UpdateDiscordSettingsCommand,
)
from accounts.application.commands.regenerate_api_key import RegenerateApiKeyCommand
from accounts.application.handlers.api_key_handlers import (
    GetApiKeyHandler,
    RegenerateApiKeyHandler,
)
from accounts.application.handlers.change_password_handler import ChangePasswordHandler
from accounts.application.handlers.discord_handlers import (
    GetDiscordSettingsHandler,
    SendTestWebhookHandler,
    UpdateDiscordSettingsHandler,
)
from accounts.application.queries.get_account_settings import (
    GetApiKeyQuery,
    GetDiscordSettingsQuery,
)
from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository
from api.v1.account.serializers import (
    ApiKeyResponseSerializer,
    ChangePasswordRequestSerializer,
    DiscordSettingsResponseSerializer,
    DiscordSettingsSerializer,
    TestWebhookRequestSerializer,
)
from api.v1.auth.serializers import ErrorResponseSerializer, MessageResponseSerializer
from api.v1.common import get_account_id, validated
from core.infrastructure.discord import DiscordWebhookClient
from core.instrumentation import Status, StatusCode, get_tracer

_user_repo = DjangoUserRepository()

tracer = get_tracer(__name__)


class ChangePasswordView(APIView):
    """View for changing the signed-in user's password."""

    @extend_schema(
        operation_id="change_password",
        summary="Change Password",
        tags=["Account"],
        request=ChangePasswordRequestSerializer,
        responses={
            200: MessageResponseSerializer,
            400: ErrorResponseSerializer,
            401: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_change_password)(request)

    async def _handle_change_password(self, request: Request) -> Response:
        with tracer.start_as_current_span("change_password") as span:
            user_id = get_account_id(request)
            data = validated(ChangePasswordRequestSerializer, request)

            handler = ChangePasswordHandler(user_repository=_user_repo)
            await handler.handle(
                ChangePasswordCommand(
                    user_id=user_id,
                    current_password=data.get("currentPassword"),
                    new_password=data.get("newPassword"),
                    confirm_password=data.get("confirmPassword"),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "Password updated successfully."},
                status=status.HTTP_200_OK,
            )


class ApiKeyView(APIView):
    """View for reading and regenerating the API key."""

    @extend_schema(
        operation_id="get_api_key",
        summary="Get API Key",
        tags=["Account"],
        responses={200: ApiKeyResponseSerializer, 401: ErrorResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_get)(request)

    @extend_schema(
        operation_id="regenerate_api_key",
        summary="Regenerate API Key",
        description="Replace the API key with a new random 32 character hex key.",
        tags=["Account"],
        request=None,
        responses={
            200: ApiKeyResponseSerializer,
            401: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_regenerate)(request)

    async def _handle_get(self, request: Request) -> Response:
        with tracer.start_as_current_span("get_api_key"):
            user_id = get_account_id(request)
            result = await GetApiKeyHandler(user_repository=_user_repo).handle(
                GetApiKeyQuery(user_id=user_id)
            )
            return Response({"success": True, "apiKey": result.api_key}, status=status.HTTP_200_OK)

    async def _handle_regenerate(self, request: Request) -> Response:
        with tracer.start_as_current_span("regenerate_api_key") as span:
            user_id = get_account_id(request)
            result = await RegenerateApiKeyHandler(user_repository=_user_repo).handle(
                RegenerateApiKeyCommand(user_id=user_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(
                {
                    "success": True,
                    "apiKey": result.api_key,
                    "message": "API key regenerated successfully.",
                },
                status=status.HTTP_200_OK,
            )


class DiscordSettingsView(APIView):
    """View for reading and saving Discord settings."""

    @extend_schema(
        operation_id="get_discord_settings",
        summary="Get Discord Settings",
        tags=["Account"],
        responses={200: DiscordSettingsResponseSerializer, 401: ErrorResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_get)(request)

    @extend_schema(
        operation_id="save_discord_settings",
        summary="Save Discord Settings",
        description=(
            "Save the webhook URL and notification toggle. When notifications "
            "are enabled the URL must be a Discord webhook URL."
        ),
        tags=["Account"],
        request=DiscordSettingsSerializer,
        responses={
            200: MessageResponseSerializer,
            400: ErrorResponseSerializer,
            401: ErrorResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_save)(request)

    async def _handle_get(self, request: Request) -> Response:
        with tracer.start_as_current_span("get_discord_settings"):
            user_id = get_account_id(request)
            settings_dto = await GetDiscordSettingsHandler(user_repository=_user_repo).handle(
                GetDiscordSettingsQuery(user_id=user_id)
            )
            return Response(
                {
                    "success": True,
                    "webhookUrl": settings_dto.webhook_url,
                    "notificationsEnabled": settings_dto.notifications_enabled,
                },
                status=status.HTTP_200_OK,
            )

    async def _handle_save(self, request: Request) -> Response:
        with tracer.start_as_current_span("save_discord_settings") as span:
            user_id = get_account_id(request)
            data = validated(DiscordSettingsSerializer, request)

            await UpdateDiscordSettingsHandler(user_repository=_user_repo).handle(
                UpdateDiscordSettingsCommand(
                    user_id=user_id,
                    webhook_url=data.get("webhookUrl"),
                    notifications_enabled=data.get("notificationsEnabled", False),
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "Discord settings saved successfully."},
                status=status.HTTP_200_OK,
            )


class TestDiscordWebhookView(APIView):
    """View for sending a Discord test message."""

    @extend_schema(
        operation_id="test_discord_webhook",
        summary="Test Discord Webhook",
        tags=["Account"],
        request=TestWebhookRequestSerializer,
        responses={
            200: MessageResponseSerializer,
            400: ErrorResponseSerializer,
            401: ErrorResponseSerializer,
            500: ErrorResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_test)(request)

    async def _handle_test(self, request: Request) -> Response:
        with tracer.start_as_current_span("test_discord_webhook") as span:
            get_account_id(request)
            data = validated(TestWebhookRequestSerializer, request)

            handler = SendTestWebhookHandler(client=DiscordWebhookClient())
            await handler.handle(SendTestWebhookCommand(webhook_url=data.get("webhookUrl")))

            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "Test message sent successfully to Discord!"},
                status=status.HTTP_200_OK,
            )

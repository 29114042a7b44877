"""
Unit tests for login, password and settings handlers.
"""

import re
import uuid
import pytest
from django.contrib.auth.hashers import check_password

from accounts.application.commands.change_password import ChangePasswordCommand
from accounts.application.commands.discord_settings import (
    SendTestWebhookCommand,
    UpdateDiscordSettingsCommand,
)
from accounts.application.commands.login import LoginCommand
from accounts.application.commands.regenerate_api_key import RegenerateApiKeyCommand
from accounts.application.handlers.api_key_handlers import (
    GetApiKeyHandler,
    RegenerateApiKeyHandler,
    generate_api_key,
)
from accounts.application.handlers.change_password_handler import ChangePasswordHandler
from accounts.application.handlers.discord_handlers import (
    GetDiscordSettingsHandler,
    SendTestWebhookHandler,
    UpdateDiscordSettingsHandler,
)
from accounts.application.handlers.login_handler import LoginHandler
from accounts.application.queries.get_account_settings import (
    GetApiKeyQuery,
    GetDiscordSettingsQuery,
)
from accounts.infrastructure.tokens import JWTTokenService
from core.domain.exceptions import (
    ConfigurationError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)

PASSWORD = "correct-horse-battery"
WEBHOOK_URL = "https://discord.com/api/webhooks/123/abc"


class RecordingWebhookClient:
    """Webhook client that records sends instead of posting."""

    def __init__(self):
        self.sent = []

    def build_test_payload(self):
        return {"content": "hi"}

    def send(self, url, payload):
        self.sent.append((url, payload))


@pytest.mark.asyncio
class TestLoginHandler:
    """Tests for LoginHandler."""

    async def test_login_issues_token(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)
        token_service = JWTTokenService(secret="unit-test-secret-at-least-32-bytes", expires_in=60)
        handler = LoginHandler(fake_user_repository, token_service)

        result = await handler.handle(LoginCommand(email=" ALICE@example.com ", password=PASSWORD))

        assert result.user.id == user_entity.id
        claims = token_service.verify(result.token)
        assert claims.user_id == user_entity.id
        assert claims.username == "alice"

    async def test_wrong_password(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)
        handler = LoginHandler(fake_user_repository)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await handler.handle(LoginCommand(email="alice@example.com", password="nope"))

        assert exc_info.value.message == "Invalid email or password."

    async def test_unknown_email_has_same_error(self, fake_user_repository):
        handler = LoginHandler(fake_user_repository)

        with pytest.raises(InvalidCredentialsError):
            await handler.handle(LoginCommand(email="ghost@example.com", password=PASSWORD))

    async def test_missing_fields(self, fake_user_repository):
        handler = LoginHandler(fake_user_repository)

        with pytest.raises(ValidationError) as exc_info:
            await handler.handle(LoginCommand(email="alice@example.com", password=None))

        assert exc_info.value.message == "Email and password are required."

    async def test_missing_secret(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)
        handler = LoginHandler(fake_user_repository, JWTTokenService(secret=""))

        with pytest.raises(ConfigurationError):
            await handler.handle(LoginCommand(email="alice@example.com", password=PASSWORD))


@pytest.mark.asyncio
class TestChangePasswordHandler:
    """Tests for ChangePasswordHandler."""

    def _command(self, user_id, current=PASSWORD, new="brand-new-password", confirm=None):
        return ChangePasswordCommand(
            user_id=user_id,
            current_password=current,
            new_password=new,
            confirm_password=new if confirm is None else confirm,
        )

    async def test_password_changed(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)
        handler = ChangePasswordHandler(fake_user_repository)

        await handler.handle(self._command(user_entity.id))

        stored = fake_user_repository.users[user_entity.id]
        assert check_password("brand-new-password", stored.password_hash)

    @pytest.mark.parametrize(
        "current, new, confirm, message",
        [
            ("", "brand-new-password", "brand-new-password", "All password fields are required."),
            (
                PASSWORD,
                "brand-new-password",
                "other-password",
                "New password and confirm password do not match.",
            ),
            (PASSWORD, "short", "short", "New password must be at least 8 characters long."),
            (
                PASSWORD,
                PASSWORD,
                PASSWORD,
                "New password must be different from current password.",
            ),
        ],
    )
    async def test_rejected_input(
        self, fake_user_repository, user_entity, current, new, confirm, message
    ):
        fake_user_repository.add(user_entity)
        handler = ChangePasswordHandler(fake_user_repository)

        with pytest.raises(ValidationError) as exc_info:
            await handler.handle(self._command(user_entity.id, current, new, confirm))

        assert exc_info.value.message == message

    async def test_wrong_current_password(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)
        handler = ChangePasswordHandler(fake_user_repository)

        with pytest.raises(IncorrectPasswordError):
            await handler.handle(self._command(user_entity.id, current="not-my-password"))

    async def test_missing_user(self, fake_user_repository):
        handler = ChangePasswordHandler(fake_user_repository)

        with pytest.raises(UserNotFoundError):
            await handler.handle(self._command(uuid.uuid4()))


@pytest.mark.asyncio
class TestApiKeyHandlers:
    """Tests for the API key handlers."""

    async def test_new_user_has_no_key(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)

        result = await GetApiKeyHandler(fake_user_repository).handle(
            GetApiKeyQuery(user_id=user_entity.id)
        )

        assert result.api_key is None

    async def test_regenerate_replaces_key(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)
        handler = RegenerateApiKeyHandler(fake_user_repository)

        first = await handler.handle(RegenerateApiKeyCommand(user_id=user_entity.id))
        second = await handler.handle(RegenerateApiKeyCommand(user_id=user_entity.id))

        assert re.fullmatch(r"[0-9a-f]{32}", first.api_key)
        assert first.api_key != second.api_key
        assert fake_user_repository.users[user_entity.id].api_key == second.api_key

    async def test_regenerate_for_missing_user(self, fake_user_repository):
        with pytest.raises(UserNotFoundError):
            await RegenerateApiKeyHandler(fake_user_repository).handle(
                RegenerateApiKeyCommand(user_id=uuid.uuid4())
            )


def test_generate_api_key_is_hex():
    assert re.fullmatch(r"[0-9a-f]{32}", generate_api_key())


@pytest.mark.asyncio
class TestDiscordHandlers:
    """Tests for the Discord settings handlers."""

    async def test_save_and_read_settings(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)

        await UpdateDiscordSettingsHandler(fake_user_repository).handle(
            UpdateDiscordSettingsCommand(
                user_id=user_entity.id, webhook_url=f" {WEBHOOK_URL} ", notifications_enabled=True
            )
        )
        settings_dto = await GetDiscordSettingsHandler(fake_user_repository).handle(
            GetDiscordSettingsQuery(user_id=user_entity.id)
        )

        assert settings_dto.webhook_url == WEBHOOK_URL
        assert settings_dto.notifications_enabled is True

    async def test_defaults(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)

        settings_dto = await GetDiscordSettingsHandler(fake_user_repository).handle(
            GetDiscordSettingsQuery(user_id=user_entity.id)
        )

        assert settings_dto.webhook_url == ""
        assert settings_dto.notifications_enabled is False

    async def test_invalid_url_rejected_when_enabled(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)

        with pytest.raises(ValidationError) as exc_info:
            await UpdateDiscordSettingsHandler(fake_user_repository).handle(
                UpdateDiscordSettingsCommand(
                    user_id=user_entity.id,
                    webhook_url="https://example.com/hook",
                    notifications_enabled=True,
                )
            )

        assert exc_info.value.message == "URL must be a Discord webhook URL."

    async def test_invalid_url_accepted_when_disabled(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)

        await UpdateDiscordSettingsHandler(fake_user_repository).handle(
            UpdateDiscordSettingsCommand(
                user_id=user_entity.id, webhook_url="not a url", notifications_enabled=False
            )
        )

        assert fake_user_repository.users[user_entity.id].discord_webhook_url == "not a url"

    async def test_empty_url_stored_as_null(self, fake_user_repository, user_entity):
        fake_user_repository.add(user_entity)

        await UpdateDiscordSettingsHandler(fake_user_repository).handle(
            UpdateDiscordSettingsCommand(
                user_id=user_entity.id, webhook_url="", notifications_enabled=True
            )
        )

        assert fake_user_repository.users[user_entity.id].discord_webhook_url is None

    async def test_send_test_message(self):
        client = RecordingWebhookClient()

        await SendTestWebhookHandler(client).handle(SendTestWebhookCommand(webhook_url=WEBHOOK_URL))

        assert client.sent == [(WEBHOOK_URL, {"content": "hi"})]

    @pytest.mark.parametrize(
        "webhook_url, message",
        [
            (None, "Webhook URL is required."),
            ("ftp://discord.com/api/webhooks/1", "Invalid webhook URL format."),
            ("https://example.com/hook", "URL must be a Discord webhook URL."),
        ],
    )
    async def test_send_test_message_validation(self, webhook_url, message):
        client = RecordingWebhookClient()

        with pytest.raises(ValidationError) as exc_info:
            await SendTestWebhookHandler(client).handle(
                SendTestWebhookCommand(webhook_url=webhook_url)
            )

        assert exc_info.value.message == message
        assert client.sent == []

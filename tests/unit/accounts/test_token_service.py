"""
Unit tests for the session token service.
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from accounts.infrastructure.tokens import JWTTokenService
from core.domain.exceptions import AuthenticationError, ConfigurationError

SECRET = "unit-test-secret-at-least-32-bytes"


class TestJWTTokenService:
    """Tests for JWTTokenService."""

    def test_issue_and_verify(self):
        service = JWTTokenService(secret=SECRET, expires_in=7200)
        user_id = uuid.uuid4()

        token = service.issue(user_id, "alice@example.com", "alice")
        claims = service.verify(token)

        assert claims.user_id == user_id
        assert claims.email == "alice@example.com"
        assert claims.username == "alice"

    def test_token_lifetime(self):
        service = JWTTokenService(secret=SECRET, expires_in=7200)

        payload = jwt.decode(
            service.issue(uuid.uuid4(), "a@example.com", "a"), SECRET, algorithms=["HS256"]
        )

        assert payload["exp"] - payload["iat"] == 7200

    def test_expired_token(self):
        service = JWTTokenService(secret=SECRET)
        token = jwt.encode(
            {
                "userId": str(uuid.uuid4()),
                "exp": datetime.now(timezone.utc) - timedelta(seconds=1),
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError) as exc_info:
            service.verify(token)
        assert exc_info.value.code == "INVALID_TOKEN"

    def test_forged_token(self):
        token = JWTTokenService(secret="another-secret-at-least-32-bytes!").issue(
            uuid.uuid4(), "a@example.com", "a"
        )

        with pytest.raises(AuthenticationError):
            JWTTokenService(secret=SECRET).verify(token)

    def test_token_without_user_id(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)}, SECRET, algorithm="HS256"
        )

        with pytest.raises(AuthenticationError):
            JWTTokenService(secret=SECRET).verify(token)

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError):
            JWTTokenService(secret=SECRET).verify("not-a-jwt")

    def test_missing_secret(self):
        service = JWTTokenService(secret="")

        with pytest.raises(ConfigurationError) as exc_info:
            service.issue(uuid.uuid4(), "a@example.com", "a")
        assert exc_info.value.message == "JWT_SECRET is not configured."

    def test_defaults_from_settings(self, settings):
        settings.JWT_SECRET = SECRET
        settings.JWT_EXPIRATION_SECONDS = 60

        service = JWTTokenService()

        assert service.secret == SECRET
        assert service.expires_in == 60

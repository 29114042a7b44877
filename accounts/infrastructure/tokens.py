"""
Session token service.

Issues and verifies the HS256 JWTs carried in the session cookie
or in an ``Authorization: Bearer`` header.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from django.conf import settings

from core.domain.exceptions import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    """Verified session claims."""

    user_id: uuid.UUID
    email: str
    username: str


class JWTTokenService:
    """HS256 session token issuer and verifier."""

    def __init__(self, secret: Optional[str] = None, expires_in: Optional[int] = None):
        self._secret = secret
        self._expires_in = expires_in

    def ensure_configured(self) -> str:
        """
        Return the signing secret.

        Raises:
            ConfigurationError: If no signing secret is configured
        """
        secret = self._secret if self._secret is not None else settings.JWT_SECRET
        if not secret:
            raise ConfigurationError()
        return secret

    @property
    def secret(self) -> str:
        return self.ensure_configured()

    @property
    def expires_in(self) -> int:
        if self._expires_in is not None:
            return self._expires_in
        return settings.JWT_EXPIRATION_SECONDS

    def issue(self, user_id: uuid.UUID, email: str, username: str) -> str:
        """
        Issue a session token.

        Args:
            user_id: User UUID
            email: User email
            username: Username

        Returns:
            Encoded JWT

        Raises:
            ConfigurationError: If no signing secret is configured
        """
        now = datetime.now(timezone.utc)
        claims = {
            "userId": str(user_id),
            "email": email,
            "username": username,
            "iat": now,
            "exp": now + timedelta(seconds=self.expires_in),
        }
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a session token.

        Args:
            token: Encoded JWT

        Returns:
            TokenClaims

        Raises:
            ConfigurationError: If no signing secret is configured
            AuthenticationError: If the token is malformed, forged or expired
        """
        secret = self.secret
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "userId"]},
            )
            user_id = uuid.UUID(str(claims["userId"]))
        except (jwt.InvalidTokenError, ValueError) as e:
            logger.debug(f"Rejected session token: {e}")
            raise AuthenticationError(
                "Invalid or expired token.", code="INVALID_TOKEN"
            ) from e

        return TokenClaims(
            user_id=user_id,
            email=claims.get("email", ""),
            username=claims.get("username", ""),
        )

"""
LoginHandler.

Exchanges an email and password for a session token.
"""
import logging

from django.contrib.auth.hashers import check_password

from accounts.application.commands.login import LoginCommand
from accounts.application.dto.account_dto import LoginResultDTO, UserDTO
from accounts.domain.user import normalize_email
from accounts.infrastructure.tokens import JWTTokenService
from accounts.ports.user_repository import UserRepository
from core.domain.exceptions import InvalidCredentialsError, ValidationError
from core.metrics import logins_total

logger = logging.getLogger(__name__)


class LoginHandler:
    """Handler for LoginCommand."""

    def __init__(self, user_repository: UserRepository, token_service: JWTTokenService = None):
        """Initialize handler with repository and token service."""
        self.user_repository = user_repository
        self.token_service = token_service or JWTTokenService()

    async def handle(self, command: LoginCommand) -> LoginResultDTO:
        """
        Handle login command.

        Args:
            command: LoginCommand

        Returns:
            LoginResultDTO with the session token

        Raises:
            ConfigurationError: If the signing secret is missing
            ValidationError: If email or password is missing
            InvalidCredentialsError: If the credentials do not match
        """
        self.token_service.ensure_configured()

        email = normalize_email(command.email)
        password = command.password or ""
        if not email or not password:
            raise ValidationError("Email and password are required.")

        user = await self.user_repository.find_by_email(email)
        if user is None or not check_password(password, user.password_hash):
            logins_total.labels(outcome="rejected").inc()
            logger.info("Login rejected", extra={"email_domain": email.rsplit("@", 1)[-1]})
            raise InvalidCredentialsError()

        token = self.token_service.issue(user.id, user.email, user.username)
        logins_total.labels(outcome="success").inc()
        logger.info("Login succeeded", extra={"user_id": str(user.id)})

        return LoginResultDTO(
            token=token,
            user=UserDTO(id=user.id, email=user.email, username=user.username),
        )

"""
SignupHandler.

Creates a user and claims their license key. The user row is inserted
first with its license pointer pre-set; if the conditional claim then
loses to a concurrent signup, the row is deleted again.
"""
import asyncio
import logging

from django.contrib.auth.hashers import make_password

from accounts.application.commands.signup import SignupCommand
from accounts.application.dto.account_dto import UserDTO
from accounts.domain.events import UserRegistered
from accounts.domain.user import User, normalize_email, normalize_username
from accounts.ports.user_repository import UserRepository
from core.domain.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    LicenseAlreadyClaimedError,
    LicenseClaimConflictError,
    ValidationError,
)
from core.infrastructure.events import event_bus
from core.metrics import license_claim_conflicts_total
from licenses.domain.events import LicenseClaimed
from licenses.domain.services import LicenseLedger
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class SignupHandler:
    """Handler for SignupCommand."""

    def __init__(
        self,
        user_repository: UserRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.user_repository = user_repository
        self.ledger = LicenseLedger(license_repository, user_repository)

    async def handle(self, command: SignupCommand) -> UserDTO:
        """
        Handle signup command.

        Args:
            command: SignupCommand

        Returns:
            UserDTO of the created user

        Raises:
            ValidationError: If a field is missing
            InvalidLicenseKeyError: If the key does not exist
            LicenseAlreadyClaimedError: If the key is already used
            DuplicateUsernameError: If the username is taken
            DuplicateEmailError: If the email is registered
            LicenseClaimConflictError: If a concurrent signup claimed the key
            DependencyError: If the store fails
        """
        username = normalize_username(command.username)
        email = normalize_email(command.email)
        password = command.password or ""
        license_key = (command.license_key or "").strip()

        if not username or not email or not password or not license_key:
            raise ValidationError("Please provide username, email, password, and license key.")

        license = await self.ledger.lookup_by_key(license_key)
        if license.is_claimed:
            raise LicenseAlreadyClaimedError()

        username_taken, email_taken = await asyncio.gather(
            self.user_repository.username_exists(username),
            self.user_repository.email_exists(email),
        )
        if username_taken:
            raise DuplicateUsernameError()
        if email_taken:
            raise DuplicateEmailError()

        user = User.create(
            username=username,
            email=email,
            password_hash=make_password(password),
            license_id=license.id,
        )
        user = await self.user_repository.create(user)

        try:
            claimed = await self.ledger.claim_for_new_user(license, user.id)
        except Exception as e:
            if isinstance(e, LicenseClaimConflictError):
                license_claim_conflicts_total.labels(operation="signup").inc()
            await self._remove_unclaimed_user(user.id, license.id)
            raise

        logger.info(
            "User registered",
            extra={"user_id": str(user.id), "license_id": str(claimed.id)},
        )

        await event_bus.publish(
            UserRegistered(user_id=user.id, username=user.username, license_id=claimed.id)
        )
        await event_bus.publish(
            LicenseClaimed(
                license_id=claimed.id,
                user_id=user.id,
                plan_type=claimed.plan_type.value,
                expires_at=claimed.expires_at,
            )
        )

        return UserDTO(id=user.id, email=user.email, username=user.username)

    async def _remove_unclaimed_user(self, user_id, license_id) -> None:
        """Delete a user whose license claim failed; cleanup errors are logged only."""
        extra = {"user_id": str(user_id), "license_id": str(license_id)}
        try:
            await self.user_repository.delete(user_id)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.error(
                "Failed to remove user after license claim failure", extra=extra, exc_info=True
            )
            return
        logger.info("Removed user after license claim failure", extra=extra)

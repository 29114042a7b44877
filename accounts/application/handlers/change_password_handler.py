"""
ChangePasswordHandler.
"""
import logging

from django.contrib.auth.hashers import check_password, make_password

from accounts.application.commands.change_password import ChangePasswordCommand
from accounts.ports.user_repository import UserRepository
from core.domain.exceptions import IncorrectPasswordError, UserNotFoundError, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class ChangePasswordHandler:
    """Handler for ChangePasswordCommand."""

    def __init__(self, user_repository: UserRepository):
        """Initialize handler with repository."""
        self.user_repository = user_repository

    async def handle(self, command: ChangePasswordCommand) -> None:
        """
        Handle change password command.

        Args:
            command: ChangePasswordCommand

        Raises:
            ValidationError: If fields are missing, mismatched, too short or unchanged
            UserNotFoundError: If the user no longer exists
            IncorrectPasswordError: If the current password is wrong
        """
        current_password = command.current_password or ""
        new_password = command.new_password or ""
        confirm_password = command.confirm_password or ""

        if not current_password or not new_password or not confirm_password:
            raise ValidationError("All password fields are required.")
        if new_password != confirm_password:
            raise ValidationError("New password and confirm password do not match.")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters long."
            )

        user = await self.user_repository.find_by_id(command.user_id)
        if user is None:
            raise UserNotFoundError()

        if not check_password(current_password, user.password_hash):
            raise IncorrectPasswordError()
        if check_password(new_password, user.password_hash):
            raise ValidationError("New password must be different from current password.")

        await self.user_repository.update_password(user.id, make_password(new_password))
        logger.info("Password changed", extra={"user_id": str(user.id)})

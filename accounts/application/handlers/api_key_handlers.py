"""
API key handlers.
"""
import logging
import secrets

from accounts.application.commands.regenerate_api_key import RegenerateApiKeyCommand
from accounts.application.dto.account_dto import ApiKeyDTO
from accounts.application.queries.get_account_settings import GetApiKeyQuery
from accounts.ports.user_repository import UserRepository
from core.domain.exceptions import UserNotFoundError

logger = logging.getLogger(__name__)

API_KEY_BYTES = 16


def generate_api_key() -> str:
    """Return a random 32-character lowercase hex key."""
    return secrets.token_hex(API_KEY_BYTES)


class GetApiKeyHandler:
    """Handler for GetApiKeyQuery."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, query: GetApiKeyQuery) -> ApiKeyDTO:
        """
        Handle get API key query.

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        user = await self.user_repository.find_by_id(query.user_id)
        if user is None:
            raise UserNotFoundError()
        return ApiKeyDTO(api_key=user.api_key)


class RegenerateApiKeyHandler:
    """Handler for RegenerateApiKeyCommand."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def handle(self, command: RegenerateApiKeyCommand) -> ApiKeyDTO:
        """
        Replace the user's API key with a fresh one.

        Args:
            command: RegenerateApiKeyCommand

        Returns:
            ApiKeyDTO with the new key

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        api_key = generate_api_key()
        if not await self.user_repository.set_api_key(command.user_id, api_key):
            raise UserNotFoundError()
        logger.info("API key regenerated", extra={"user_id": str(command.user_id)})
        return ApiKeyDTO(api_key=api_key)

"""
RegenerateApiKeyCommand.
"""
import uuid
from dataclasses import dataclass


@dataclass
class RegenerateApiKeyCommand:
    """Command to issue a fresh API key for the signed-in user."""

    user_id: uuid.UUID

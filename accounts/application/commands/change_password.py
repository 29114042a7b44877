"""
ChangePasswordCommand.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class ChangePasswordCommand:
    """Command to replace the signed-in user's password."""

    user_id: uuid.UUID
    current_password: Optional[str]
    new_password: Optional[str]
    confirm_password: Optional[str]

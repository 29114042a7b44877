"""
LoginCommand.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class LoginCommand:
    """Command to exchange credentials for a session token."""

    email: Optional[str]
    password: Optional[str]

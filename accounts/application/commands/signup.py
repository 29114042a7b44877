"""
SignupCommand.

Command to register a user with an unused license key.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class SignupCommand:
    """Command to create a user and claim their license key."""

    username: Optional[str]
    email: Optional[str]
    password: Optional[str]
    license_key: Optional[str]

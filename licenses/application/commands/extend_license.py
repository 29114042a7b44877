"""
ExtendLicenseCommand.

Command to redeem an unused license key for the signed-in user.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class ExtendLicenseCommand:
    """Command to extend a user's access with a new license key."""

    user_id: uuid.UUID
    license_key: Optional[str]

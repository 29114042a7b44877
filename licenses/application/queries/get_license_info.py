"""
GetLicenseInfoQuery.

Query for the signed-in user's active license.
"""
import uuid
from dataclasses import dataclass


@dataclass
class GetLicenseInfoQuery:
    """Query to get the active license of a user."""

    user_id: uuid.UUID

"""
ListTasksQuery.
"""
import uuid
from dataclasses import dataclass


@dataclass
class ListTasksQuery:
    """Query for the signed-in user's tasks."""

    user_id: uuid.UUID

"""
Scan task commands.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateTaskCommand:
    """Command to create a scan task for the signed-in user."""

    user_id: uuid.UUID
    title: Optional[str]
    list_file: Optional[str]
    proxies_file: Optional[str] = None
    machine_id: Optional[str] = None
    machine_name: Optional[str] = None
    machine_ip: Optional[str] = None
    threads: Optional[int] = None
    timeout: Optional[str] = None
    start_from: Optional[str] = None


@dataclass
class UpdateTaskStatusCommand:
    """Command to pause or resume a task."""

    user_id: uuid.UUID
    task_id: uuid.UUID
    status: Optional[str]


@dataclass
class DeleteTaskCommand:
    """Command to delete a task."""

    user_id: uuid.UUID
    task_id: uuid.UUID

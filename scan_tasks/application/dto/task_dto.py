"""
Scan task DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from scan_tasks.domain.task import ScanTask


@dataclass
class TaskDTO:
    """DTO for a scan task row."""

    id: uuid.UUID
    user_id: uuid.UUID
    task_id: str
    title: str
    list_file: str
    proxies_file: Optional[str]
    machine_id: Optional[str]
    machine_name: Optional[str]
    machine_ip: Optional[str]
    threads: int
    timeout: str
    start_from: Optional[str]
    status: str
    progress: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, task: ScanTask) -> "TaskDTO":
        return cls(
            id=task.id,
            user_id=task.user_id,
            task_id=task.task_id,
            title=task.title,
            list_file=task.list_file,
            proxies_file=task.proxies_file,
            machine_id=task.machine_id,
            machine_name=task.machine_name,
            machine_ip=task.machine_ip,
            threads=task.threads,
            timeout=task.timeout,
            start_from=task.start_from,
            status=task.status.value,
            progress=task.progress,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

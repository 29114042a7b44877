"""
Scan task domain entity.
"""
import time
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import TaskStatus

DEFAULT_THREADS = 50
DEFAULT_TIMEOUT = "5s"


def generate_task_id() -> str:
    """Short display id: ``T-`` plus the last six digits of the millisecond clock."""
    return f"T-{str(int(time.time() * 1000))[-6:]}"


@dataclass(frozen=True)
class ScanTask:
    """
    Scan task domain entity.

    Tasks are owned by exactly one user.
    """

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
    status: TaskStatus
    progress: int
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate task entity."""
        if not self.title:
            raise ValueError("Task title is required")
        if not self.list_file:
            raise ValueError("List file is required")
        if self.threads < 1:
            raise ValueError("Threads must be at least 1")
        if not 0 <= self.progress <= 100:
            raise ValueError("Progress must be between 0 and 100")

    @classmethod
    def create(
        cls,
        user_id: uuid.UUID,
        title: str,
        list_file: str,
        proxies_file: Optional[str] = None,
        machine_id: Optional[str] = None,
        machine_name: Optional[str] = None,
        machine_ip: Optional[str] = None,
        threads: Optional[int] = None,
        timeout: Optional[str] = None,
        start_from: Optional[str] = None,
    ) -> "ScanTask":
        """
        Create a new running ScanTask.

        Args:
            user_id: Owner UUID
            title: Task name
            list_file: Target list file name
            proxies_file: Optional proxies file name
            machine_id: Optional machine id
            machine_name: Optional machine name
            machine_ip: Optional machine address
            threads: Thread count (defaults to 50)
            timeout: Timeout label (defaults to "5s")
            start_from: Optional resume marker

        Returns:
            ScanTask entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid.uuid4(),
            user_id=user_id,
            task_id=generate_task_id(),
            title=title,
            list_file=list_file,
            proxies_file=proxies_file,
            machine_id=machine_id,
            machine_name=machine_name,
            machine_ip=machine_ip,
            threads=threads or DEFAULT_THREADS,
            timeout=timeout or DEFAULT_TIMEOUT,
            start_from=start_from,
            status=TaskStatus.RUNNING,
            progress=0,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id

    def with_status(self, status: TaskStatus) -> "ScanTask":
        return replace(self, status=status, updated_at=datetime.now(timezone.utc))

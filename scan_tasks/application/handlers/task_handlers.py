"""
Scan task handlers.

Create, list, pause/resume and delete tasks. A task may only be
changed by its owner.
"""
import logging
from typing import List

from core.domain.exceptions import PermissionDeniedError, TaskNotFoundError, ValidationError
from core.domain.value_objects import TaskStatus
from core.infrastructure.events import event_bus
from scan_tasks.application.commands.task_commands import (
    CreateTaskCommand,
    DeleteTaskCommand,
    UpdateTaskStatusCommand,
)
from scan_tasks.application.dto.task_dto import TaskDTO
from scan_tasks.application.queries.list_tasks import ListTasksQuery
from scan_tasks.domain.events import TaskCreated, TaskDeleted, TaskStatusChanged
from scan_tasks.domain.task import ScanTask
from scan_tasks.ports.task_repository import ScanTaskRepository

logger = logging.getLogger(__name__)


async def _load_owned_task(repository: ScanTaskRepository, task_id, user_id) -> ScanTask:
    """
    Load a task and check ownership.

    Raises:
        TaskNotFoundError: If the task does not exist
        PermissionDeniedError: If another user owns it
    """
    task = await repository.find_by_id(task_id)
    if task is None:
        raise TaskNotFoundError()
    if not task.is_owned_by(user_id):
        logger.warning(
            "Task access denied",
            extra={"task_id": str(task_id), "user_id": str(user_id)},
        )
        raise PermissionDeniedError()
    return task


class ListTasksHandler:
    """Handler for ListTasksQuery."""

    def __init__(self, task_repository: ScanTaskRepository):
        self.task_repository = task_repository

    async def handle(self, query: ListTasksQuery) -> List[TaskDTO]:
        tasks = await self.task_repository.list_for_user(query.user_id)
        return [TaskDTO.from_entity(task) for task in tasks]


class CreateTaskHandler:
    """Handler for CreateTaskCommand."""

    def __init__(self, task_repository: ScanTaskRepository):
        self.task_repository = task_repository

    async def handle(self, command: CreateTaskCommand) -> TaskDTO:
        """
        Handle create task command.

        Args:
            command: CreateTaskCommand

        Returns:
            TaskDTO of the created task

        Raises:
            ValidationError: If the name or list file is missing
        """
        title = (command.title or "").strip()
        list_file = (command.list_file or "").strip()
        if not title or not list_file:
            raise ValidationError("Task name and list file are required")

        try:
            task = ScanTask.create(
                user_id=command.user_id,
                title=title,
                list_file=list_file,
                proxies_file=command.proxies_file,
                machine_id=command.machine_id,
                machine_name=command.machine_name,
                machine_ip=command.machine_ip,
                threads=command.threads,
                timeout=command.timeout,
                start_from=command.start_from,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        task = await self.task_repository.save(task)
        logger.info("Task created", extra={"task_id": str(task.id), "user_id": str(task.user_id)})

        await event_bus.publish(
            TaskCreated(
                task_id=task.id,
                user_id=task.user_id,
                display_id=task.task_id,
                title=task.title,
            )
        )
        return TaskDTO.from_entity(task)


class UpdateTaskStatusHandler:
    """Handler for UpdateTaskStatusCommand."""

    def __init__(self, task_repository: ScanTaskRepository):
        self.task_repository = task_repository

    async def handle(self, command: UpdateTaskStatusCommand) -> TaskDTO:
        """
        Handle update task status command.

        Args:
            command: UpdateTaskStatusCommand

        Returns:
            TaskDTO of the updated task

        Raises:
            ValidationError: If the status is not Running or Paused
            TaskNotFoundError: If the task does not exist
            PermissionDeniedError: If another user owns it
        """
        try:
            status = TaskStatus(command.status)
        except ValueError as e:
            raise ValidationError("Invalid status. Must be 'Running' or 'Paused'") from e

        task = await _load_owned_task(self.task_repository, command.task_id, command.user_id)
        old_status = task.status

        task = await self.task_repository.save(task.with_status(status))

        await event_bus.publish(
            TaskStatusChanged(
                task_id=task.id,
                user_id=task.user_id,
                display_id=task.task_id,
                title=task.title,
                old_status=old_status.value,
                new_status=status.value,
            )
        )
        return TaskDTO.from_entity(task)


class DeleteTaskHandler:
    """Handler for DeleteTaskCommand."""

    def __init__(self, task_repository: ScanTaskRepository):
        self.task_repository = task_repository

    async def handle(self, command: DeleteTaskCommand) -> None:
        """
        Handle delete task command.

        Raises:
            TaskNotFoundError: If the task does not exist
            PermissionDeniedError: If another user owns it
        """
        task = await _load_owned_task(self.task_repository, command.task_id, command.user_id)
        await self.task_repository.delete(task.id, command.user_id)
        logger.info("Task deleted", extra={"task_id": str(task.id), "user_id": str(task.user_id)})

        await event_bus.publish(
            TaskDeleted(
                task_id=task.id,
                user_id=task.user_id,
                display_id=task.task_id,
                title=task.title,
            )
        )

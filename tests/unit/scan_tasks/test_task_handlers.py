"""
Unit tests for scan task handlers.
"""

import re
import uuid

import pytest

from core.domain.exceptions import PermissionDeniedError, TaskNotFoundError, ValidationError
from core.domain.value_objects import TaskStatus
from scan_tasks.application.commands.task_commands import (
    CreateTaskCommand,
    DeleteTaskCommand,
    UpdateTaskStatusCommand,
)
from scan_tasks.application.handlers.task_handlers import (
    CreateTaskHandler,
    DeleteTaskHandler,
    ListTasksHandler,
    UpdateTaskStatusHandler,
)
from scan_tasks.application.queries.list_tasks import ListTasksQuery
from scan_tasks.domain.events import TaskCreated, TaskDeleted, TaskStatusChanged
from scan_tasks.domain.task import ScanTask, generate_task_id

OWNER = uuid.uuid4()


async def _create(repository, **overrides):
    values = {"user_id": OWNER, "title": "Shop scan", "list_file": "targets.txt"}
    values.update(overrides)
    return await CreateTaskHandler(repository).handle(CreateTaskCommand(**values))


@pytest.mark.asyncio
class TestTaskHandlers:
    """Tests for the task handlers."""

    async def test_create_applies_defaults(self, fake_task_repository, published_events):
        task = await _create(fake_task_repository)

        assert task.status == "Running"
        assert task.progress == 0
        assert task.threads == 50
        assert task.timeout == "5s"
        assert re.fullmatch(r"T-\d{6}", task.task_id)
        assert [type(event) for event in published_events] == [TaskCreated]

    async def test_create_keeps_options(self, fake_task_repository, published_events):
        task = await _create(
            fake_task_repository,
            proxies_file="proxies.txt",
            machine_id="m-1",
            machine_name="Worker 1",
            machine_ip="10.0.0.1",
            threads=200,
            timeout="10s",
            start_from="500",
        )

        assert task.proxies_file == "proxies.txt"
        assert task.machine_name == "Worker 1"
        assert task.threads == 200
        assert task.timeout == "10s"
        assert task.start_from == "500"

    @pytest.mark.parametrize("title, list_file", [("", "targets.txt"), ("Scan", "  "), (None, None)])
    async def test_create_requires_name_and_list(
        self, fake_task_repository, published_events, title, list_file
    ):
        with pytest.raises(ValidationError) as exc_info:
            await _create(fake_task_repository, title=title, list_file=list_file)

        assert exc_info.value.message == "Task name and list file are required"
        assert fake_task_repository.tasks == {}

    async def test_list_only_returns_own_tasks(self, fake_task_repository, published_events):
        mine = await _create(fake_task_repository)
        await _create(fake_task_repository, user_id=uuid.uuid4())

        tasks = await ListTasksHandler(fake_task_repository).handle(ListTasksQuery(user_id=OWNER))

        assert [task.id for task in tasks] == [mine.id]

    async def test_pause_and_resume(self, fake_task_repository, published_events):
        task = await _create(fake_task_repository)
        handler = UpdateTaskStatusHandler(fake_task_repository)

        paused = await handler.handle(
            UpdateTaskStatusCommand(user_id=OWNER, task_id=task.id, status="Paused")
        )
        resumed = await handler.handle(
            UpdateTaskStatusCommand(user_id=OWNER, task_id=task.id, status="Running")
        )

        assert paused.status == "Paused"
        assert resumed.status == "Running"
        changes = [event for event in published_events if isinstance(event, TaskStatusChanged)]
        assert [(e.old_status, e.new_status) for e in changes] == [
            ("Running", "Paused"),
            ("Paused", "Running"),
        ]

    @pytest.mark.parametrize("status", ["Stopped", "running", "", None])
    async def test_invalid_status(self, fake_task_repository, published_events, status):
        task = await _create(fake_task_repository)

        with pytest.raises(ValidationError) as exc_info:
            await UpdateTaskStatusHandler(fake_task_repository).handle(
                UpdateTaskStatusCommand(user_id=OWNER, task_id=task.id, status=status)
            )

        assert exc_info.value.message == "Invalid status. Must be 'Running' or 'Paused'"

    async def test_update_missing_task(self, fake_task_repository, published_events):
        with pytest.raises(TaskNotFoundError):
            await UpdateTaskStatusHandler(fake_task_repository).handle(
                UpdateTaskStatusCommand(user_id=OWNER, task_id=uuid.uuid4(), status="Paused")
            )

    async def test_update_other_users_task(self, fake_task_repository, published_events):
        task = await _create(fake_task_repository)

        with pytest.raises(PermissionDeniedError):
            await UpdateTaskStatusHandler(fake_task_repository).handle(
                UpdateTaskStatusCommand(user_id=uuid.uuid4(), task_id=task.id, status="Paused")
            )

        assert fake_task_repository.tasks[task.id].status is TaskStatus.RUNNING

    async def test_delete(self, fake_task_repository, published_events):
        task = await _create(fake_task_repository)

        await DeleteTaskHandler(fake_task_repository).handle(
            DeleteTaskCommand(user_id=OWNER, task_id=task.id)
        )

        assert fake_task_repository.tasks == {}
        assert isinstance(published_events[-1], TaskDeleted)

    async def test_delete_other_users_task(self, fake_task_repository, published_events):
        task = await _create(fake_task_repository)

        with pytest.raises(PermissionDeniedError):
            await DeleteTaskHandler(fake_task_repository).handle(
                DeleteTaskCommand(user_id=uuid.uuid4(), task_id=task.id)
            )

        assert task.id in fake_task_repository.tasks


class TestScanTask:
    """Tests for the ScanTask entity."""

    def test_threads_must_be_positive(self):
        task = ScanTask.create(user_id=OWNER, title="t", list_file="l")
        with pytest.raises(ValueError):
            ScanTask(**{**task.__dict__, "threads": 0})

    def test_with_status(self):
        task = ScanTask.create(user_id=OWNER, title="t", list_file="l")

        paused = task.with_status(TaskStatus.PAUSED)

        assert paused.status is TaskStatus.PAUSED
        assert task.status is TaskStatus.RUNNING

    def test_generate_task_id(self):
        assert re.fullmatch(r"T-\d{6}", generate_task_id())

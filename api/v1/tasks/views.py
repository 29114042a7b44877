"""
Scan task API views.

A signed-in user can list, create, pause/resume and delete their own tasks.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.auth.serializers import ErrorResponseSerializer, MessageResponseSerializer
from api.v1.common import get_account_id, validated
from api.v1.tasks.serializers import (
    CreateTaskRequestSerializer,
    TaskListResponseSerializer,
    TaskResponseSerializer,
    TaskSerializer,
    UpdateTaskStatusRequestSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
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
from scan_tasks.infrastructure.repositories.django_task_repository import (
    DjangoScanTaskRepository,
)

_task_repo = DjangoScanTaskRepository()

tracer = get_tracer(__name__)


class TaskListView(APIView):
    """View for listing and creating tasks."""

    @extend_schema(
        operation_id="list_tasks",
        summary="List Tasks",
        description="Return the user's tasks, newest first.",
        tags=["Tasks"],
        responses={200: TaskListResponseSerializer, 401: ErrorResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    @extend_schema(
        operation_id="create_task",
        summary="Create Task",
        description=(
            "Create a running task. File fields accept a file name or an "
            "object with a name."
        ),
        tags=["Tasks"],
        request=CreateTaskRequestSerializer,
        responses={
            200: TaskResponseSerializer,
            400: ErrorResponseSerializer,
            401: ErrorResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_tasks") as span:
            user_id = get_account_id(request)
            tasks = await ListTasksHandler(task_repository=_task_repo).handle(
                ListTasksQuery(user_id=user_id)
            )
            span.set_attribute("tasks.count", len(tasks))
            return Response(
                {"success": True, "tasks": TaskSerializer(tasks, many=True).data},
                status=status.HTTP_200_OK,
            )

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_task") as span:
            user_id = get_account_id(request)
            data = validated(CreateTaskRequestSerializer, request)
            machine = data.get("selectedMachine") or {}

            task = await CreateTaskHandler(task_repository=_task_repo).handle(
                CreateTaskCommand(
                    user_id=user_id,
                    title=data.get("taskName"),
                    list_file=data.get("listFile"),
                    proxies_file=data.get("proxiesFile") or None,
                    machine_id=machine.get("id"),
                    machine_name=machine.get("name"),
                    machine_ip=machine.get("ip"),
                    threads=data.get("selectedThreads"),
                    timeout=data.get("selectedTimeout"),
                    start_from=data.get("startFrom") or None,
                )
            )

            span.set_attribute("task.id", str(task.id))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "task": TaskSerializer(task).data},
                status=status.HTTP_200_OK,
            )


class TaskDetailView(APIView):
    """View for updating and deleting a single task."""

    @extend_schema(
        operation_id="update_task_status",
        summary="Pause or Resume Task",
        tags=["Tasks"],
        request=UpdateTaskStatusRequestSerializer,
        responses={
            200: TaskResponseSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
    )
    def patch(self, request: Request, task_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_update)(request, task_id)

    @extend_schema(
        operation_id="delete_task",
        summary="Delete Task",
        tags=["Tasks"],
        responses={
            200: MessageResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
    )
    def delete(self, request: Request, task_id: uuid.UUID) -> Response:
        return async_to_sync(self._handle_delete)(request, task_id)

    async def _handle_update(self, request: Request, task_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_task_status") as span:
            user_id = get_account_id(request)
            span.set_attribute("task.id", str(task_id))
            data = validated(UpdateTaskStatusRequestSerializer, request)

            task = await UpdateTaskStatusHandler(task_repository=_task_repo).handle(
                UpdateTaskStatusCommand(user_id=user_id, task_id=task_id, status=data.get("status"))
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "task": TaskSerializer(task).data},
                status=status.HTTP_200_OK,
            )

    async def _handle_delete(self, request: Request, task_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("delete_task") as span:
            user_id = get_account_id(request)
            span.set_attribute("task.id", str(task_id))

            await DeleteTaskHandler(task_repository=_task_repo).handle(
                DeleteTaskCommand(user_id=user_id, task_id=task_id)
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "Task deleted successfully"},
                status=status.HTTP_200_OK,
            )

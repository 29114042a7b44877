"""
Integration tests for the scan task endpoints.
"""

import uuid
from unittest.mock import MagicMock, patch

import pytest
from rest_framework.test import APIClient

from accounts.infrastructure.tokens import JWTTokenService
from scan_tasks.infrastructure.models import ScanTask

TASKS_URL = "/api/tasks"


def _task_url(task_id):
    return f"{TASKS_URL}/{task_id}"


def _create_body(**overrides):
    body = {
        "taskName": "Nightly scan",
        "listFile": {"name": "targets.txt"},
        "proxiesFile": {"name": "proxies.txt"},
        "selectedMachine": {"id": "m-1", "name": "Worker 1", "ip": "10.0.0.5"},
        "selectedThreads": 100,
        "selectedTimeout": "10s",
        "startFrom": "42",
    }
    body.update(overrides)
    return body


def _client_for(user):
    client = APIClient()
    token = JWTTokenService().issue(user.id, user.email, user.username)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateTaskAPI:
    """Integration tests for POST /api/tasks."""

    def test_create(self, auth_client):
        response = auth_client.post(TASKS_URL, _create_body(), format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        task = body["task"]
        assert task["title"] == "Nightly scan"
        assert task["list_file"] == "targets.txt"
        assert task["proxies_file"] == "proxies.txt"
        assert task["machine_name"] == "Worker 1"
        assert task["machine_ip"] == "10.0.0.5"
        assert task["threads"] == 100
        assert task["timeout"] == "10s"
        assert task["start_from"] == "42"
        assert task["status"] == "Running"
        assert task["progress"] == 0
        assert task["task_id"].startswith("T-")
        assert task["user_id"] == str(auth_client.user.id)
        assert ScanTask.objects.filter(id=task["id"]).exists()

    def test_plain_file_names_and_defaults(self, auth_client):
        response = auth_client.post(
            TASKS_URL,
            {"taskName": "  Quick  ", "listFile": "list.txt"},
            format="json",
        )

        assert response.status_code == 200
        task = response.json()["task"]
        assert task["title"] == "Quick"
        assert task["list_file"] == "list.txt"
        assert task["proxies_file"] is None
        assert task["threads"] == 50
        assert task["timeout"] == "5s"

    def test_missing_list_file(self, auth_client):
        response = auth_client.post(TASKS_URL, {"taskName": "No list"}, format="json")

        assert response.status_code == 400
        assert response.json()["message"] == "Task name and list file are required"
        assert not ScanTask.objects.exists()

    def test_non_positive_threads(self, auth_client):
        response = auth_client.post(TASKS_URL, _create_body(selectedThreads=0), format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_json_array_body(self, auth_client):
        response = auth_client.post(TASKS_URL, [1, 2], format="json")

        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be a JSON object."

    def test_anonymous(self, api_client):
        response = api_client.post(TASKS_URL, _create_body(), format="json")

        assert response.status_code == 401


@pytest.mark.django_db
@pytest.mark.integration
class TestListTasksAPI:
    """Integration tests for GET /api/tasks."""

    def test_only_own_tasks(self, auth_client, make_user):
        other_client = _client_for(make_user())
        other_client.post(TASKS_URL, _create_body(taskName="Not mine"), format="json")
        auth_client.post(TASKS_URL, _create_body(taskName="First"), format="json")
        auth_client.post(TASKS_URL, _create_body(taskName="Second"), format="json")

        response = auth_client.get(TASKS_URL)

        assert response.status_code == 200
        titles = [task["title"] for task in response.json()["tasks"]]
        assert sorted(titles) == ["First", "Second"]

    def test_empty(self, auth_client):
        response = auth_client.get(TASKS_URL)

        assert response.json() == {"success": True, "tasks": []}


@pytest.mark.django_db
@pytest.mark.integration
class TestTaskDetailAPI:
    """Integration tests for PATCH and DELETE /api/tasks/<id>."""

    @pytest.fixture
    def task(self, auth_client):
        return auth_client.post(TASKS_URL, _create_body(), format="json").json()["task"]

    def test_pause_and_resume(self, auth_client, task):
        paused = auth_client.patch(_task_url(task["id"]), {"status": "Paused"}, format="json")
        resumed = auth_client.patch(_task_url(task["id"]), {"status": "Running"}, format="json")

        assert paused.status_code == 200
        assert paused.json()["task"]["status"] == "Paused"
        assert resumed.json()["task"]["status"] == "Running"
        assert ScanTask.objects.get(id=task["id"]).status == "Running"

    def test_invalid_status(self, auth_client, task):
        response = auth_client.patch(_task_url(task["id"]), {"status": "Done"}, format="json")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid status. Must be 'Running' or 'Paused'"

    def test_missing_task(self, auth_client):
        response = auth_client.patch(_task_url(uuid.uuid4()), {"status": "Paused"}, format="json")

        assert response.status_code == 404
        assert response.json()["message"] == "Task not found"

    def test_other_users_task(self, task, make_user):
        intruder = _client_for(make_user())

        patched = intruder.patch(_task_url(task["id"]), {"status": "Paused"}, format="json")
        deleted = intruder.delete(_task_url(task["id"]))

        assert patched.status_code == 403
        assert deleted.status_code == 403
        assert patched.json()["message"] == "Unauthorized"
        assert ScanTask.objects.get(id=task["id"]).status == "Running"

    def test_delete(self, auth_client, task):
        response = auth_client.delete(_task_url(task["id"]))

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Task deleted successfully"}
        assert not ScanTask.objects.filter(id=task["id"]).exists()
        assert auth_client.delete(_task_url(task["id"])).status_code == 404

    def test_malformed_id(self, auth_client):
        response = auth_client.delete(f"{TASKS_URL}/not-a-uuid")

        assert response.status_code == 404


@pytest.mark.django_db
@pytest.mark.integration
def test_task_created_notifies_discord(auth_client):
    auth_client.post(
        "/api/discord-settings",
        {"webhookUrl": "https://discord.com/api/webhooks/9/abc", "notificationsEnabled": True},
        format="json",
    )
    delivered = MagicMock(status_code=204, reason="No Content")

    with patch("core.infrastructure.discord.requests.post", return_value=delivered) as post:
        response = auth_client.post(TASKS_URL, _create_body(), format="json")

    assert response.status_code == 200
    embed = post.call_args.kwargs["json"]["embeds"][0]
    assert embed["title"] == "Task Created"
    assert "Nightly scan" in embed["description"]

"""
Pytest configuration and shared fixtures.
"""

import asyncio
import uuid
from dataclasses import replace
from datetime import timedelta

import pytest
from django.contrib.auth.hashers import make_password
from django.core.cache import cache
from django.utils import timezone

from accounts.domain.user import User
from accounts.infrastructure.models import User as UserModel
from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository
from accounts.infrastructure.tokens import JWTTokenService
from core.domain.exceptions import ConflictError
from core.infrastructure.events import event_bus
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import generate_license_key
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.ports.license_holder_repository import LicenseHolder
from scan_tasks.infrastructure.repositories.django_task_repository import (
    DjangoScanTaskRepository,
)

TEST_PASSWORD = "correct-horse-battery"


class InMemoryLicenseRepository:
    """License store whose conditional claim is atomic within one event loop."""

    def __init__(self):
        self.licenses = {}
        self.claim_results = []

    def add(self, license: License) -> License:
        self.licenses[license.id] = license
        return license

    async def save(self, license):
        await asyncio.sleep(0)
        self.licenses[license.id] = license
        return license

    async def find_by_id(self, license_id):
        await asyncio.sleep(0)
        return self.licenses.get(license_id)

    async def find_by_key(self, license_key):
        await asyncio.sleep(0)
        for license in self.licenses.values():
            if license.license_key == license_key:
                return license
        return None

    async def claim(self, license_id, user_id, expires_at):
        await asyncio.sleep(0)
        if self.claim_results:
            return self.claim_results.pop(0)
        license = self.licenses.get(license_id)
        if license is None or license.user_id is not None:
            return False
        self.licenses[license_id] = license.claimed_by(user_id, expires_at)
        return True

    async def release(self, license_id):
        await asyncio.sleep(0)
        license = self.licenses.get(license_id)
        if license is not None:
            self.licenses[license_id] = replace(license, user_id=None)


class InMemoryUserRepository:
    """User store implementing both the user and license holder ports."""

    def __init__(self):
        self.users = {}
        self.fail_assign = False

    def add(self, user: User) -> User:
        self.users[user.id] = user
        return user

    async def create(self, user):
        await asyncio.sleep(0)
        for existing in self.users.values():
            if existing.username == user.username or existing.email == user.email:
                raise ConflictError("Username or email already exists.")
        self.users[user.id] = user
        return user

    async def find_by_id(self, user_id):
        await asyncio.sleep(0)
        return self.users.get(user_id)

    async def find_by_email(self, email):
        await asyncio.sleep(0)
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    async def username_exists(self, username):
        await asyncio.sleep(0)
        return any(user.username == username for user in self.users.values())

    async def email_exists(self, email):
        await asyncio.sleep(0)
        return any(user.email == email for user in self.users.values())

    async def delete(self, user_id):
        await asyncio.sleep(0)
        self.users.pop(user_id, None)

    async def update_password(self, user_id, password_hash):
        await asyncio.sleep(0)
        self.users[user_id] = self.users[user_id].with_password(password_hash)

    async def set_api_key(self, user_id, api_key):
        await asyncio.sleep(0)
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], api_key=api_key)
        return True

    async def update_discord_settings(self, user_id, webhook_url, notifications_enabled):
        await asyncio.sleep(0)
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(
            self.users[user_id],
            discord_webhook_url=webhook_url,
            discord_notifications_enabled=notifications_enabled,
        )
        return True

    async def find_holder(self, user_id):
        await asyncio.sleep(0)
        user = self.users.get(user_id)
        if user is None:
            return None
        return LicenseHolder(user_id=user.id, license_id=user.license_id)

    async def assign_license(self, user_id, license_id):
        await asyncio.sleep(0)
        if self.fail_assign:
            raise RuntimeError("connection lost")
        self.users[user_id] = replace(self.users[user_id], license_id=license_id)


class InMemoryTaskRepository:
    """Task store keyed by task UUID."""

    def __init__(self):
        self.tasks = {}

    async def save(self, task):
        self.tasks[task.id] = task
        return task

    async def find_by_id(self, task_id):
        return self.tasks.get(task_id)

    async def list_for_user(self, user_id):
        tasks = [task for task in self.tasks.values() if task.user_id == user_id]
        return sorted(tasks, key=lambda task: task.created_at, reverse=True)

    async def delete(self, task_id, user_id):
        task = self.tasks.get(task_id)
        if task is not None and task.user_id == user_id:
            del self.tasks[task_id]


@pytest.fixture(autouse=True)
def clear_cache():
    """Reset rate limit counters between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def published_events(monkeypatch):
    """Record published domain events instead of dispatching them."""
    events = []

    async def record(event):
        events.append(event)

    monkeypatch.setattr(event_bus, "publish", record)
    return events


@pytest.fixture
def fake_license_repository():
    return InMemoryLicenseRepository()


@pytest.fixture
def fake_user_repository():
    return InMemoryUserRepository()


@pytest.fixture
def fake_task_repository():
    return InMemoryTaskRepository()


@pytest.fixture
def user_entity():
    """An in-memory user with a known password."""
    return User.create(
        username="alice",
        email="alice@example.com",
        password_hash=make_password(TEST_PASSWORD),
    )


@pytest.fixture
def user_repository():
    """Fixture for the Django user repository."""
    return DjangoUserRepository()


@pytest.fixture
def license_repository():
    """Fixture for the Django license repository."""
    return DjangoLicenseRepository()


@pytest.fixture
def task_repository():
    """Fixture for the Django task repository."""
    return DjangoScanTaskRepository()


@pytest.fixture
def make_license(db):
    """Factory for unclaimed license rows."""

    def factory(plan_type="30d", license_key=None):
        return LicenseModel.objects.create(
            license_key=license_key or generate_license_key(), plan_type=plan_type
        )

    return factory


@pytest.fixture
def make_user(db, make_license):
    """Factory for users holding a claimed license."""

    def factory(username=None, email=None, password=TEST_PASSWORD, expires_in_days=30):
        suffix = uuid.uuid4().hex[:8]
        license = make_license()
        user = UserModel.objects.create(
            username=username or f"user{suffix}",
            email=email or f"user{suffix}@example.com",
            password_hash=make_password(password),
            license=license,
        )
        license.user = user
        license.expires_at = timezone.now() + timedelta(days=expires_in_days)
        license.save()
        return user

    return factory


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def auth_client(api_client, make_user):
    """API client signed in as a fresh user; the user is attached as ``.user``."""
    user = make_user()
    token = JWTTokenService().issue(user.id, user.email, user.username)
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    api_client.user = user
    return api_client

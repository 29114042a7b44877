"""
Unit tests for SignupHandler.
"""

import asyncio
import uuid

import pytest
from django.contrib.auth.hashers import check_password

from accounts.application.commands.signup import SignupCommand
from accounts.application.handlers.signup_handler import SignupHandler
from accounts.domain.events import UserRegistered
from accounts.domain.user import User
from core.domain.exceptions import (
    DependencyError,
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidLicenseKeyError,
    LicenseAlreadyClaimedError,
    LicenseClaimConflictError,
    ValidationError,
)
from core.domain.value_objects import PlanType
from licenses.domain.events import LicenseClaimed
from licenses.domain.license import License


def _command(**overrides):
    values = {
        "username": "alice",
        "email": "Alice@Example.com",
        "password": "s3cret-password",
        "license_key": "SQLB-AAAA",
    }
    values.update(overrides)
    return SignupCommand(**values)


@pytest.mark.asyncio
class TestSignupHandler:
    """Tests for SignupHandler."""

    async def test_signup_claims_license(
        self, fake_user_repository, fake_license_repository, published_events
    ):
        license = fake_license_repository.add(License.create("SQLB-AAAA", PlanType.NINETY_DAYS))
        handler = SignupHandler(fake_user_repository, fake_license_repository)

        result = await handler.handle(_command(username="  alice  "))

        assert result.username == "alice"
        assert result.email == "alice@example.com"
        user = fake_user_repository.users[result.id]
        assert user.license_id == license.id
        assert check_password("s3cret-password", user.password_hash)
        claimed = fake_license_repository.licenses[license.id]
        assert claimed.user_id == result.id
        assert (claimed.expires_at - claimed.created_at).days in (89, 90)

        assert [type(event) for event in published_events] == [UserRegistered, LicenseClaimed]
        assert published_events[1].plan_type == "90d"

    @pytest.mark.parametrize("field", ["username", "email", "password", "license_key"])
    async def test_missing_field(
        self, fake_user_repository, fake_license_repository, published_events, field
    ):
        handler = SignupHandler(fake_user_repository, fake_license_repository)

        with pytest.raises(ValidationError) as exc_info:
            await handler.handle(_command(**{field: "  " if field != "password" else ""}))

        assert exc_info.value.message == (
            "Please provide username, email, password, and license key."
        )

    async def test_unknown_license_key(self, fake_user_repository, fake_license_repository):
        handler = SignupHandler(fake_user_repository, fake_license_repository)

        with pytest.raises(InvalidLicenseKeyError):
            await handler.handle(_command())

        assert fake_user_repository.users == {}

    async def test_license_already_claimed(self, fake_user_repository, fake_license_repository):
        license = License.create("SQLB-AAAA")
        fake_license_repository.add(
            license.claimed_by(uuid.uuid4(), license.created_at)
        )
        handler = SignupHandler(fake_user_repository, fake_license_repository)

        with pytest.raises(LicenseAlreadyClaimedError):
            await handler.handle(_command())

        assert fake_user_repository.users == {}

    async def test_duplicate_username_reported_before_email(
        self, fake_user_repository, fake_license_repository
    ):
        fake_license_repository.add(License.create("SQLB-AAAA"))
        fake_user_repository.add(
            User.create(username="alice", email="alice@example.com", password_hash="hash")
        )
        handler = SignupHandler(fake_user_repository, fake_license_repository)

        with pytest.raises(DuplicateUsernameError) as exc_info:
            await handler.handle(_command())

        assert exc_info.value.message == "Username already exists."

    async def test_duplicate_email(self, fake_user_repository, fake_license_repository):
        fake_license_repository.add(License.create("SQLB-AAAA"))
        fake_user_repository.add(
            User.create(username="someone", email="alice@example.com", password_hash="hash")
        )
        handler = SignupHandler(fake_user_repository, fake_license_repository)

        with pytest.raises(DuplicateEmailError) as exc_info:
            await handler.handle(_command())

        assert exc_info.value.message == "Email is already registered."

    async def test_lost_claim_removes_user(
        self, fake_user_repository, fake_license_repository, published_events
    ):
        fake_license_repository.add(License.create("SQLB-AAAA"))
        fake_license_repository.claim_results = [False]
        handler = SignupHandler(fake_user_repository, fake_license_repository)

        with pytest.raises(LicenseClaimConflictError):
            await handler.handle(_command())

        assert fake_user_repository.users == {}
        assert published_events == []

    async def test_store_failure_during_claim_removes_user(
        self, fake_user_repository, fake_license_repository, published_events, monkeypatch
    ):
        fake_license_repository.add(License.create("SQLB-AAAA"))

        async def failing_claim(license_id, user_id, expires_at):
            raise DependencyError("Failed to claim license.")

        monkeypatch.setattr(fake_license_repository, "claim", failing_claim)
        handler = SignupHandler(fake_user_repository, fake_license_repository)

        with pytest.raises(DependencyError):
            await handler.handle(_command())

        assert fake_user_repository.users == {}
        assert published_events == []

    async def test_failed_cleanup_keeps_original_error(
        self, fake_user_repository, fake_license_repository, monkeypatch
    ):
        fake_license_repository.add(License.create("SQLB-AAAA"))
        fake_license_repository.claim_results = [False]

        async def failing_delete(user_id):
            raise DependencyError("Failed to delete user.")

        monkeypatch.setattr(fake_user_repository, "delete", failing_delete)
        handler = SignupHandler(fake_user_repository, fake_license_repository)

        with pytest.raises(LicenseClaimConflictError):
            await handler.handle(_command())

    async def test_concurrent_signups_with_one_key(
        self, fake_user_repository, fake_license_repository, published_events
    ):
        license = fake_license_repository.add(License.create("SQLB-RACE"))
        handler = SignupHandler(fake_user_repository, fake_license_repository)

        results = await asyncio.gather(
            *(
                handler.handle(
                    _command(
                        username=f"racer{index}",
                        email=f"racer{index}@example.com",
                        license_key="SQLB-RACE",
                    )
                )
                for index in range(8)
            ),
            return_exceptions=True,
        )

        successes = [result for result in results if not isinstance(result, Exception)]
        failures = [result for result in results if isinstance(result, Exception)]
        assert len(successes) == 1
        assert len(failures) == 7
        assert all(
            isinstance(failure, (LicenseClaimConflictError, LicenseAlreadyClaimedError))
            for failure in failures
        )

        winner = successes[0]
        assert list(fake_user_repository.users) == [winner.id]
        assert fake_license_repository.licenses[license.id].user_id == winner.id
        assert sum(isinstance(event, UserRegistered) for event in published_events) == 1

"""
Unit tests for the License entity.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.value_objects import PlanType
from licenses.domain.license import License
from licenses.infrastructure.models import generate_license_key


class TestLicense:
    """Tests for License entity."""

    def test_create_is_unclaimed(self):
        license = License.create("SQLB-AAAA-BBBB-CCCC-DDDD")

        assert license.plan_type is PlanType.THIRTY_DAYS
        assert license.user_id is None
        assert license.expires_at is None
        assert license.is_claimed is False

    def test_key_is_required(self):
        with pytest.raises(ValueError):
            License.create("")

    def test_claimed_license_without_expiry_is_inactive(self):
        license = License.create("SQLB-KEY")
        legacy = License(
            id=license.id,
            license_key=license.license_key,
            plan_type=license.plan_type,
            user_id=uuid.uuid4(),
            expires_at=None,
            created_at=license.created_at,
            updated_at=license.updated_at,
        )

        assert legacy.is_claimed is True
        assert legacy.is_active(datetime.now(timezone.utc)) is False

    def test_plan_label_keeps_stored_plan(self):
        license = replace(License.create("SQLB-KEY"), plan_name="1y")

        assert license.plan_type is PlanType.THIRTY_DAYS
        assert license.plan_type.days == 30
        assert license.plan_label == "1y"
        assert License.create("SQLB-KEY", PlanType.NINETY_DAYS).plan_label == "90d"

    def test_is_active(self):
        now = datetime.now(timezone.utc)
        license = License.create("SQLB-KEY")
        assert license.is_active(now) is False

        claimed = license.claimed_by(uuid.uuid4(), now + timedelta(days=1))
        assert claimed.is_active(now) is True
        assert claimed.is_active(now + timedelta(days=2)) is False


def test_generate_license_key_format():
    key = generate_license_key("TEST")
    prefix, *groups = key.split("-")

    assert prefix == "TEST"
    assert len(groups) == 4
    assert all(len(group) == 4 and group.isalnum() and group.upper() == group for group in groups)

"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import Optional

from asgiref.sync import sync_to_async
from django.db import DatabaseError
from django.utils import timezone

from core.domain.exceptions import DependencyError
from core.domain.value_objects import PlanType
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements the conditional claim as a single UPDATE
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            license_key=model.license_key,
            plan_type=PlanType.parse(model.plan_type),
            user_id=model.user_id,
            expires_at=model.expires_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
            plan_name=model.plan_type,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to Django model.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        model, created = LicenseModel.objects.get_or_create(
            id=license.id,
            defaults={
                "license_key": license.license_key,
                "plan_type": license.plan_label,
                "user_id": license.user_id,
                "expires_at": license.expires_at,
            },
        )
        if not created:
            model.plan_type = license.plan_label
            model.user_id = license.user_id
            model.expires_at = license.expires_at
        return model

    @sync_to_async
    def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        try:
            model = self._to_model(license)
            model.save()
        except DatabaseError as e:
            raise DependencyError("Failed to save license.") from e
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        try:
            model = LicenseModel.objects.get(id=license_id)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:
            return None
        except DatabaseError as e:
            raise DependencyError("Failed to load license.") from e

    @sync_to_async
    def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by its key.

        Args:
            license_key: License key string

        Returns:
            License entity or None if not found
        """
        try:
            model = LicenseModel.objects.get(license_key=license_key)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:
            return None
        except DatabaseError as e:
            raise DependencyError("Failed to verify license key.") from e

    @sync_to_async
    def claim(self, license_id: uuid.UUID, user_id: uuid.UUID, expires_at: datetime) -> bool:
        """
        Claim a license with ``UPDATE ... WHERE id = %s AND user_id IS NULL``.

        Args:
            license_id: License UUID
            user_id: Claiming user UUID
            expires_at: Expiry to store

        Returns:
            True if exactly one row was updated
        """
        try:
            updated = LicenseModel.objects.filter(id=license_id, user_id__isnull=True).update(
                user_id=user_id,
                expires_at=expires_at,
                updated_at=timezone.now(),
            )
        except DatabaseError as e:
            raise DependencyError("Failed to update license.") from e
        return updated == 1

    @sync_to_async
    def release(self, license_id: uuid.UUID) -> None:
        """
        Clear a license's owner.

        Args:
            license_id: License UUID
        """
        try:
            LicenseModel.objects.filter(id=license_id).update(
                user_id=None, updated_at=timezone.now()
            )
        except DatabaseError as e:
            raise DependencyError("Failed to release license.") from e

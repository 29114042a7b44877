"""
Django implementation of the user repository ports.

One adapter serves both the accounts app (``UserRepository``) and the
license ledger (``LicenseHolderRepository``).
"""
import uuid
from typing import Optional

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from accounts.domain.user import User
from accounts.infrastructure.models import User as UserModel
from accounts.ports.user_repository import UserRepository
from core.domain.exceptions import ConflictError, DependencyError
from licenses.ports.license_holder_repository import LicenseHolder, LicenseHolderRepository


class DjangoUserRepository(UserRepository, LicenseHolderRepository):
    """
    Django ORM implementation of UserRepository.

    Database failures surface as DependencyError.
    """

    def _to_domain(self, model: UserModel) -> User:
        """
        Convert Django model to domain entity.

        Args:
            model: Django User model

        Returns:
            User domain entity
        """
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            license_id=model.license_id,
            api_key=model.api_key,
            discord_webhook_url=model.discord_webhook_url,
            discord_notifications_enabled=model.discord_notifications_enabled,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def create(self, user: User) -> User:
        """
        Insert a new user row.

        Args:
            user: User entity

        Returns:
            Saved user entity
        """
        try:
            with transaction.atomic():
                model = UserModel.objects.create(
                    id=user.id,
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                    license_id=user.license_id,
                )
        except IntegrityError as e:
            raise ConflictError("Username or email already exists.") from e
        except DatabaseError as e:
            raise DependencyError("Failed to create user.") from e
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """
        Find a user by ID.

        Args:
            user_id: User UUID

        Returns:
            User entity or None if not found
        """
        try:
            return self._to_domain(UserModel.objects.get(id=user_id))
        except UserModel.DoesNotExist:
            return None
        except DatabaseError as e:
            raise DependencyError("Failed to load user.") from e

    @sync_to_async
    def find_by_email(self, email: str) -> Optional[User]:
        try:
            return self._to_domain(UserModel.objects.get(email=email))
        except UserModel.DoesNotExist:
            return None
        except DatabaseError as e:
            raise DependencyError("Failed to load user.") from e

    @sync_to_async
    def username_exists(self, username: str) -> bool:
        try:
            return UserModel.objects.filter(username=username).exists()
        except DatabaseError as e:
            raise DependencyError("Failed to validate username or email uniqueness.") from e

    @sync_to_async
    def email_exists(self, email: str) -> bool:
        try:
            return UserModel.objects.filter(email=email).exists()
        except DatabaseError as e:
            raise DependencyError("Failed to validate username or email uniqueness.") from e

    @sync_to_async
    def delete(self, user_id: uuid.UUID) -> None:
        try:
            UserModel.objects.filter(id=user_id).delete()
        except DatabaseError as e:
            raise DependencyError("Failed to delete user.") from e

    @sync_to_async
    def update_password(self, user_id: uuid.UUID, password_hash: str) -> None:
        try:
            UserModel.objects.filter(id=user_id).update(
                password_hash=password_hash, updated_at=timezone.now()
            )
        except DatabaseError as e:
            raise DependencyError("Failed to update password.") from e

    @sync_to_async
    def set_api_key(self, user_id: uuid.UUID, api_key: str) -> bool:
        try:
            updated = UserModel.objects.filter(id=user_id).update(
                api_key=api_key, updated_at=timezone.now()
            )
        except DatabaseError as e:
            raise DependencyError("Failed to generate API key.") from e
        return updated == 1

    @sync_to_async
    def update_discord_settings(
        self, user_id: uuid.UUID, webhook_url: Optional[str], notifications_enabled: bool
    ) -> bool:
        try:
            updated = UserModel.objects.filter(id=user_id).update(
                discord_webhook_url=webhook_url,
                discord_notifications_enabled=notifications_enabled,
                updated_at=timezone.now(),
            )
        except DatabaseError as e:
            raise DependencyError("Failed to save Discord settings.") from e
        return updated == 1

    @sync_to_async
    def find_holder(self, user_id: uuid.UUID) -> Optional[LicenseHolder]:
        """
        Read a user's current license pointer.

        Args:
            user_id: User UUID

        Returns:
            LicenseHolder or None if the user does not exist
        """
        try:
            row = UserModel.objects.filter(id=user_id).values("id", "license_id").first()
        except DatabaseError as e:
            raise DependencyError("Failed to load user.") from e
        if row is None:
            return None
        return LicenseHolder(user_id=row["id"], license_id=row["license_id"])

    @sync_to_async
    def assign_license(self, user_id: uuid.UUID, license_id: uuid.UUID) -> None:
        """
        Point a user at a license.

        Args:
            user_id: User UUID
            license_id: License UUID
        """
        try:
            updated = UserModel.objects.filter(id=user_id).update(
                license_id=license_id, updated_at=timezone.now()
            )
        except DatabaseError as e:
            raise DependencyError("Failed to update user license.") from e
        if updated != 1:
            raise DependencyError("Failed to update user license.")

"""
License domain services.

The license ledger owns every write to the ``licenses`` table: key
lookup, the first claim at signup, and extension by redeeming a new key.
Claims are guarded by a conditional write on ``user_id IS NULL`` so that
of two concurrent requests for one key exactly one wins.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from core.domain.exceptions import (
    DependencyError,
    InvalidLicenseKeyError,
    LicenseAlreadyClaimedError,
    LicenseClaimConflictError,
    UserNotFoundError,
)
from core.domain.value_objects import PlanType
from licenses.domain.license import License
from licenses.ports.license_holder_repository import LicenseHolderRepository
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


def plan_days(plan_type) -> int:
    """Grant length in days for a plan string or PlanType."""
    if isinstance(plan_type, PlanType):
        return plan_type.days
    return PlanType.parse(plan_type).days


def compute_extension(
    plan_type, current_expires_at: Optional[datetime], now: datetime
) -> datetime:
    """
    Compute the expiry after redeeming a license of ``plan_type``.

    Unexpired time is carried over; a lapsed or missing expiry restarts
    from ``now``.

    Args:
        plan_type: Plan of the license being redeemed
        current_expires_at: The user's existing expiry, if any
        now: Reference time

    Returns:
        New expiry
    """
    days = plan_days(plan_type)
    if current_expires_at is None:
        return now + timedelta(days=days)
    return max(current_expires_at, now) + timedelta(days=days)


@dataclass(frozen=True)
class LicenseExtension:
    """Outcome of a successful extension."""

    license_id: uuid.UUID
    plan_type: PlanType
    expires_at: datetime
    days_added: int


class LicenseLedger:
    """Domain service for license claims and extensions."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        holder_repository: LicenseHolderRepository = None,
    ):
        """Initialize ledger with repositories."""
        self.license_repository = license_repository
        self.holder_repository = holder_repository

    async def lookup_by_key(self, license_key: str) -> License:
        """
        Find a license by key.

        Raises:
            InvalidLicenseKeyError: If no license has this key
        """
        license = await self.license_repository.find_by_key(license_key)
        if license is None:
            raise InvalidLicenseKeyError()
        return license

    async def claim_for_new_user(
        self, license: License, user_id: uuid.UUID, now: Optional[datetime] = None
    ) -> License:
        """
        Claim an unclaimed license for a just-created user.

        Args:
            license: License found by ``lookup_by_key``
            user_id: New user's UUID
            now: Reference time (defaults to now)

        Returns:
            The claimed License

        Raises:
            LicenseClaimConflictError: If another request claimed it first
        """
        now = now or datetime.now(timezone.utc)
        expires_at = now + timedelta(days=license.plan_type.days)

        claimed = await self.license_repository.claim(license.id, user_id, expires_at)
        if not claimed:
            logger.warning(
                "License claim lost to a concurrent signup",
                extra={"license_id": str(license.id), "user_id": str(user_id)},
            )
            raise LicenseClaimConflictError(
                "License key was claimed during registration. Please try again."
            )

        return license.claimed_by(user_id, expires_at)

    async def extend_and_assign(
        self, license_key: str, user_id: uuid.UUID, now: Optional[datetime] = None
    ) -> LicenseExtension:
        """
        Redeem an unused key to extend a user's access.

        The new expiry starts from the user's current license expiry
        when that is still in the future. Writes exactly one license row
        and then exactly one user row; if the user write fails the
        license claim is released.

        Args:
            license_key: Key to redeem
            user_id: Redeeming user's UUID
            now: Reference time (defaults to now)

        Returns:
            LicenseExtension

        Raises:
            InvalidLicenseKeyError: If the key does not exist
            LicenseAlreadyClaimedError: If the key is already owned by anyone
            UserNotFoundError: If the user row is gone
            LicenseClaimConflictError: If a concurrent request claimed the key
            DependencyError: If the user pointer could not be moved
        """
        now = now or datetime.now(timezone.utc)

        license = await self.lookup_by_key(license_key)
        if license.is_claimed:
            raise LicenseAlreadyClaimedError()

        holder = await self.holder_repository.find_holder(user_id)
        if holder is None:
            raise UserNotFoundError()

        current_expires_at = None
        if holder.license_id is not None:
            current = await self.license_repository.find_by_id(holder.license_id)
            if current is not None:
                current_expires_at = current.expires_at

        recheck = await self.license_repository.find_by_id(license.id)
        if recheck is None or recheck.is_claimed:
            raise LicenseClaimConflictError()

        days_added = license.plan_type.days
        expires_at = compute_extension(license.plan_type, current_expires_at, now)

        claimed = await self.license_repository.claim(license.id, user_id, expires_at)
        if not claimed:
            logger.warning(
                "License extension lost to a concurrent claim",
                extra={"license_id": str(license.id), "user_id": str(user_id)},
            )
            raise LicenseClaimConflictError(
                "Failed to update license. It may have been claimed by another user."
            )

        try:
            await self.holder_repository.assign_license(user_id, license.id)
        except Exception as e:
            logger.error(
                "Failed to assign license to user, releasing claim",
                extra={"license_id": str(license.id), "user_id": str(user_id)},
                exc_info=True,
            )
            await self.license_repository.release(license.id)
            raise DependencyError("Failed to assign license to user.") from e

        return LicenseExtension(
            license_id=license.id,
            plan_type=license.plan_type,
            expires_at=expires_at,
            days_added=days_added,
        )

    async def get_active_license(self, user_id: uuid.UUID) -> Optional[License]:
        """
        Return the license a user currently points at, if any.

        Args:
            user_id: User UUID

        Returns:
            License or None when the user or the license is missing
        """
        holder = await self.holder_repository.find_holder(user_id)
        if holder is None or holder.license_id is None:
            return None
        return await self.license_repository.find_by_id(holder.license_id)

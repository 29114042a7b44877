"""
ExtendLicenseHandler.

Handler for redeeming a license key as an extension.
"""
import logging

from core.domain.exceptions import LicenseClaimConflictError, ValidationError
from core.infrastructure.events import event_bus
from core.metrics import license_claim_conflicts_total
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.dto.license_dto import LicenseExtensionDTO
from licenses.domain.events import LicenseExtended
from licenses.domain.services import LicenseLedger
from licenses.ports.license_holder_repository import LicenseHolderRepository
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ExtendLicenseHandler:
    """Handler for ExtendLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        holder_repository: LicenseHolderRepository,
    ):
        """Initialize handler with repositories."""
        self.ledger = LicenseLedger(license_repository, holder_repository)

    async def handle(self, command: ExtendLicenseCommand) -> LicenseExtensionDTO:
        """
        Handle extend license command.

        Args:
            command: ExtendLicenseCommand

        Returns:
            LicenseExtensionDTO

        Raises:
            ValidationError: If the key is blank
            InvalidLicenseKeyError: If the key does not exist
            LicenseAlreadyClaimedError: If the key is already used
            UserNotFoundError: If the user no longer exists
            LicenseClaimConflictError: If a concurrent request won the key
            DependencyError: If the store fails
        """
        license_key = (command.license_key or "").strip()
        if not license_key:
            raise ValidationError("License key is required.")

        try:
            extension = await self.ledger.extend_and_assign(license_key, command.user_id)
        except LicenseClaimConflictError:
            license_claim_conflicts_total.labels(operation="extend").inc()
            raise

        logger.info(
            "License extended",
            extra={
                "user_id": str(command.user_id),
                "license_id": str(extension.license_id),
                "days_added": extension.days_added,
            },
        )

        await event_bus.publish(
            LicenseExtended(
                license_id=extension.license_id,
                user_id=command.user_id,
                plan_type=extension.plan_type.value,
                expires_at=extension.expires_at,
                days_added=extension.days_added,
            )
        )

        return LicenseExtensionDTO(
            license_id=extension.license_id,
            expires_at=extension.expires_at,
            days_added=extension.days_added,
            plan_type=extension.plan_type.value,
        )

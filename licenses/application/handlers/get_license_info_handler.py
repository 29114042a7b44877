"""
GetLicenseInfoHandler.

Handler for the license-info query.
"""
from typing import Optional

from licenses.application.dto.license_dto import LicenseInfoDTO
from licenses.application.queries.get_license_info import GetLicenseInfoQuery
from licenses.domain.services import LicenseLedger
from licenses.ports.license_holder_repository import LicenseHolderRepository
from licenses.ports.license_repository import LicenseRepository


class GetLicenseInfoHandler:
    """Handler for GetLicenseInfoQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        holder_repository: LicenseHolderRepository,
    ):
        """Initialize handler with repositories."""
        self.ledger = LicenseLedger(license_repository, holder_repository)

    async def handle(self, query: GetLicenseInfoQuery) -> Optional[LicenseInfoDTO]:
        """
        Handle get license info query.

        A missing user or license yields None rather than an error.

        Args:
            query: GetLicenseInfoQuery

        Returns:
            LicenseInfoDTO or None
        """
        license = await self.ledger.get_active_license(query.user_id)
        if license is None:
            return None
        return LicenseInfoDTO(expires_at=license.expires_at, plan_type=license.plan_label)

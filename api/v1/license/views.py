"""
License API views.

Endpoints for the signed-in user's license:
- Read the active license
- Extend access by redeeming another license key
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository
from api.v1.auth.serializers import ErrorResponseSerializer
from api.v1.common import get_account_id, validated
from api.v1.license.serializers import (
    ExtendLicenseRequestSerializer,
    ExtendLicenseResponseSerializer,
    LicenseInfoResponseSerializer,
    LicenseInfoSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.handlers.extend_license_handler import ExtendLicenseHandler
from licenses.application.handlers.get_license_info_handler import GetLicenseInfoHandler
from licenses.application.queries.get_license_info import GetLicenseInfoQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_license_repo = DjangoLicenseRepository()
_user_repo = DjangoUserRepository()

tracer = get_tracer(__name__)


class LicenseInfoView(APIView):
    """View for the signed-in user's license."""

    @extend_schema(
        operation_id="license_info",
        summary="Get License Info",
        description="Return the user's active license, or null when they have none.",
        tags=["License"],
        responses={200: LicenseInfoResponseSerializer, 401: ErrorResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_license_info)(request)

    async def _handle_license_info(self, request: Request) -> Response:
        """Async handler for license info."""
        with tracer.start_as_current_span("license_info") as span:
            user_id = get_account_id(request)
            span.set_attribute("user.id", str(user_id))

            handler = GetLicenseInfoHandler(
                license_repository=_license_repo, holder_repository=_user_repo
            )
            license_info = await handler.handle(GetLicenseInfoQuery(user_id=user_id))

            span.set_attribute("license.found", license_info is not None)
            return Response(
                {
                    "success": True,
                    "license": (
                        LicenseInfoSerializer(license_info).data if license_info else None
                    ),
                },
                status=status.HTTP_200_OK,
            )


class ExtendLicenseView(APIView):
    """View for extending access with a new license key."""

    @extend_schema(
        operation_id="extend_license",
        summary="Extend License",
        description=(
            "Redeem an unused license key. Days are added to the current "
            "expiry when it is still in the future, otherwise to now."
        ),
        tags=["License"],
        request=ExtendLicenseRequestSerializer,
        responses={
            200: ExtendLicenseResponseSerializer,
            400: ErrorResponseSerializer,
            401: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
            500: ErrorResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_extend)(request)

    async def _handle_extend(self, request: Request) -> Response:
        """Async handler for license extension."""
        with tracer.start_as_current_span("extend_license") as span:
            user_id = get_account_id(request)
            span.set_attribute("user.id", str(user_id))
            data = validated(ExtendLicenseRequestSerializer, request)

            handler = ExtendLicenseHandler(
                license_repository=_license_repo, holder_repository=_user_repo
            )
            result = await handler.handle(
                ExtendLicenseCommand(user_id=user_id, license_key=data.get("licenseKey"))
            )

            span.set_attribute("license.id", str(result.license_id))
            span.set_attribute("license.days_added", result.days_added)
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, **ExtendLicenseResponseSerializer(result).data},
                status=status.HTTP_200_OK,
            )

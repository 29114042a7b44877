"""
API exception handlers.

Every failure is rendered as ``{"success": false, "message", "code"}``
with the HTTP status mapped from the domain exception family.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ParseError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    DependencyError,
    DomainException,
    InvalidLicenseKeyError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    WebhookRejectedError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

# Checked in order; InvalidLicenseKeyError must precede NotFoundError
DOMAIN_STATUS_MAP = (
    ((InvalidLicenseKeyError, ValidationError, WebhookRejectedError), status.HTTP_400_BAD_REQUEST),
    ((AuthenticationError,), status.HTTP_401_UNAUTHORIZED),
    ((PermissionDeniedError,), status.HTTP_403_FORBIDDEN),
    ((NotFoundError,), status.HTTP_404_NOT_FOUND),
    ((ConflictError,), status.HTTP_409_CONFLICT),
    ((DependencyError,), status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def error_body(message: str, code: str) -> Dict[str, Any]:
    return {"success": False, "message": message, "code": code}


def status_for(exc: DomainException) -> int:
    """Map a domain exception to its HTTP status."""
    for exc_types, status_code in DOMAIN_STATUS_MAP:
        if isinstance(exc, exc_types):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)
    endpoint = _get_endpoint(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
        errors_total.labels(error_type=exc.code, endpoint=endpoint).inc()
    elif isinstance(exc, ParseError):
        response = Response(
            error_body("Request body must be valid JSON.", "INVALID_JSON"),
            status=status.HTTP_400_BAD_REQUEST,
        )
        errors_total.labels(error_type="INVALID_JSON", endpoint=endpoint).inc()
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        detail = response.data.get("detail", exc.default_detail) if response.data else exc.default_detail
        response.data = error_body(str(detail), code)
        errors_total.labels(error_type=code, endpoint=endpoint).inc()
    elif isinstance(exc, Http404):
        response = Response(
            error_body("Resource not found", "NOT_FOUND"), status=status.HTTP_404_NOT_FOUND
        )
    else:
        response = _handle_unexpected_exception(exc, trace_id)
        errors_total.labels(error_type="INTERNAL_ERROR", endpoint=endpoint).inc()

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _get_endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request else "unknown"


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            "Domain exception: %s - %s",
            exc.code,
            exc.message,
            extra={"trace_id": trace_id},
            exc_info=exc.__cause__ is not None,
        )
    else:
        logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(exc.message, exc.code), status=status_code)


def _handle_unexpected_exception(exc: Exception, trace_id: Optional[str]) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        error_body("An internal error occurred", "INTERNAL_ERROR"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

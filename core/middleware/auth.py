"""
Session authentication middleware.

This middleware validates the session JWT for dashboard APIs and
attaches the authenticated account id to the request.
"""

import logging
from typing import Callable, Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse

from accounts.infrastructure.tokens import JWTTokenService
from core.domain.exceptions import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

PUBLIC_PATHS = (
    "/api/login",
    "/api/signup",
    "/api/logout",
    "/api/schema",
    "/api/docs",
    "/api/redoc",
)

SKIP_PREFIXES = (
    "/health",
    "/ready",
    "/metrics",
    "/admin",
    "/static",
)


class JWTAuthenticationMiddleware:
    """
    Middleware for session authentication.

    This middleware:
    1. Leaves non-API and public API paths alone
    2. Reads the token from the session cookie or a Bearer header
    3. Returns 401 when the token is missing or invalid
    4. Sets ``request.account_id`` for downstream views
    """

    def __init__(self, get_response: Callable, token_service: JWTTokenService = None):
        """Initialize middleware."""
        self.get_response = get_response
        self.token_service = token_service or JWTTokenService()

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request.account_id = None  # type: ignore

        if self._should_skip_auth(request.path):
            return self.get_response(request)

        try:
            self.token_service.ensure_configured()
        except ConfigurationError as e:
            logger.error("Session token secret is not configured")
            return self._error(e.message, e.code, 500)

        token = self._get_token(request)
        if not token:
            return self._error("Authentication required.", "AUTHENTICATION_REQUIRED", 401)

        try:
            claims = self.token_service.verify(token)
        except AuthenticationError as e:
            return self._error(e.message, e.code, 401)

        request.account_id = claims.user_id  # type: ignore
        request.account_claims = claims  # type: ignore
        return self.get_response(request)

    def _should_skip_auth(self, path: str) -> bool:
        """
        Check if authentication should be skipped for this path.

        Args:
            path: Request path

        Returns:
            True if auth should be skipped
        """
        if path.startswith(SKIP_PREFIXES):
            return True
        if not path.startswith("/api/"):
            return True
        return any(path == public or path.startswith(public + "/") for public in PUBLIC_PATHS)

    def _get_token(self, request: HttpRequest) -> Optional[str]:
        """Extract the session token from the cookie or Authorization header."""
        token = request.COOKIES.get(settings.SESSION_TOKEN_COOKIE_NAME)
        if token:
            return token

        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            return auth_header[7:].strip() or None
        return None

    def _error(self, message: str, code: str, status: int) -> JsonResponse:
        return JsonResponse({"success": False, "message": message, "code": code}, status=status)

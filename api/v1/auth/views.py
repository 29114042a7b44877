"""
Authentication API views.

These endpoints are public:
- Sign up with an unused license key
- Log in and receive the session cookie
- Log out
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.login import LoginCommand
from accounts.application.commands.signup import SignupCommand
from accounts.application.handlers.login_handler import LoginHandler
from accounts.application.handlers.signup_handler import SignupHandler
from accounts.infrastructure.repositories.django_user_repository import DjangoUserRepository
from api.v1.auth.serializers import (
    ErrorResponseSerializer,
    LoginRequestSerializer,
    LoginResponseSerializer,
    MessageResponseSerializer,
    SignupRequestSerializer,
)
from api.v1.common import validated
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_user_repo = DjangoUserRepository()
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)


class SignupView(APIView):
    """View for signing up with a license key."""

    @extend_schema(
        operation_id="signup",
        summary="Sign Up",
        description=(
            "Create an account. Requires an unused license key, which is "
            "claimed for the new user."
        ),
        tags=["Auth"],
        request=SignupRequestSerializer,
        responses={
            201: MessageResponseSerializer,
            400: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
            500: ErrorResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_signup)(request)

    async def _handle_signup(self, request: Request) -> Response:
        """Async handler for signup."""
        with tracer.start_as_current_span("signup") as span:
            span.set_attribute("operation", "signup")
            data = validated(SignupRequestSerializer, request)

            handler = SignupHandler(user_repository=_user_repo, license_repository=_license_repo)
            user = await handler.handle(
                SignupCommand(
                    username=data.get("username"),
                    email=data.get("email"),
                    password=data.get("password"),
                    license_key=data.get("licenseKey"),
                )
            )

            span.set_attribute("user.id", str(user.id))
            span.set_status(Status(StatusCode.OK))
            return Response(
                {"success": True, "message": "Sign up successful. You can now log in."},
                status=status.HTTP_201_CREATED,
            )


class LoginView(APIView):
    """View for logging in."""

    @extend_schema(
        operation_id="login",
        summary="Log In",
        description=(
            "Exchange email and password for a session token. The token is "
            "returned in the body and set as an httpOnly cookie."
        ),
        tags=["Auth"],
        request=LoginRequestSerializer,
        responses={
            200: LoginResponseSerializer,
            400: ErrorResponseSerializer,
            401: ErrorResponseSerializer,
            500: ErrorResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_login)(request)

    async def _handle_login(self, request: Request) -> Response:
        """Async handler for login."""
        with tracer.start_as_current_span("login") as span:
            span.set_attribute("operation", "login")
            data = validated(LoginRequestSerializer, request)

            handler = LoginHandler(user_repository=_user_repo)
            result = await handler.handle(
                LoginCommand(email=data.get("email"), password=data.get("password"))
            )

            response = Response(
                {
                    "success": True,
                    "message": "Login successful. Redirecting...",
                    "token": result.token,
                    "user": {
                        "id": str(result.user.id),
                        "email": result.user.email,
                        "username": result.user.username,
                    },
                },
                status=status.HTTP_200_OK,
            )
            response.set_cookie(
                settings.SESSION_TOKEN_COOKIE_NAME,
                result.token,
                max_age=settings.JWT_EXPIRATION_SECONDS,
                httponly=True,
                secure=not settings.DEBUG,
                samesite="Strict",
                path="/",
            )
            span.set_attribute("user.id", str(result.user.id))
            span.set_status(Status(StatusCode.OK))
            return response


class LogoutView(APIView):
    """View for logging out."""

    @extend_schema(
        operation_id="logout",
        summary="Log Out",
        description="Clear the session cookie.",
        tags=["Auth"],
        request=None,
        responses={200: MessageResponseSerializer},
    )
    def post(self, request: Request) -> Response:
        response = Response({"success": True, "message": "Logged out."}, status=status.HTTP_200_OK)
        response.delete_cookie(settings.SESSION_TOKEN_COOKIE_NAME, path="/", samesite="Strict")
        return response

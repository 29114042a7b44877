"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. The API layer maps
each family to a stable HTTP status.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when input is missing or malformed."""

    def __init__(self, message: str = "Invalid request", code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class AuthenticationError(DomainException):
    """Raised when credentials or session tokens are rejected."""

    def __init__(
        self, message: str = "Authentication required.", code: str = "AUTHENTICATION_FAILED"
    ):
        super().__init__(message, code=code)


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not match."""

    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message, code="INVALID_CREDENTIALS")


class IncorrectPasswordError(AuthenticationError):
    """Raised when the current password given for a change is wrong."""

    def __init__(self, message: str = "Current password is incorrect."):
        super().__init__(message, code="INCORRECT_PASSWORD")


class PermissionDeniedError(DomainException):
    """Raised when a user acts on a resource they do not own."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="PERMISSION_DENIED")


class NotFoundError(DomainException):
    """Base exception for missing entities."""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class UserNotFoundError(NotFoundError):
    """Raised when a user row is absent."""

    def __init__(self, message: str = "User not found."):
        super().__init__(message, code="USER_NOT_FOUND")


class InvalidLicenseKeyError(NotFoundError):
    """Raised when no license matches the supplied key."""

    def __init__(self, message: str = "License key is invalid."):
        super().__init__(message, code="INVALID_LICENSE_KEY")


class TaskNotFoundError(NotFoundError):
    """Raised when a task is absent."""

    def __init__(self, message: str = "Task not found"):
        super().__init__(message, code="TASK_NOT_FOUND")


class ConflictError(DomainException):
    """Base exception for uniqueness and claim conflicts."""

    def __init__(self, message: str = "Conflict", code: str = "CONFLICT"):
        super().__init__(message, code=code)


class DuplicateUsernameError(ConflictError):
    """Raised when the username is taken."""

    def __init__(self, message: str = "Username already exists."):
        super().__init__(message, code="DUPLICATE_USERNAME")


class DuplicateEmailError(ConflictError):
    """Raised when the email is already registered."""

    def __init__(self, message: str = "Email is already registered."):
        super().__init__(message, code="DUPLICATE_EMAIL")


class LicenseAlreadyClaimedError(ConflictError):
    """Raised when a license key is already bound to a user."""

    def __init__(self, message: str = "License key has already been used."):
        super().__init__(message, code="LICENSE_ALREADY_CLAIMED")


class LicenseClaimConflictError(ConflictError):
    """Raised when a concurrent request claimed the license first."""

    def __init__(
        self,
        message: str = "License key has been claimed by another user. Please try again.",
    ):
        super().__init__(message, code="LICENSE_CLAIM_CONFLICT")


class DependencyError(DomainException):
    """Raised when the store or an outbound service fails."""

    def __init__(self, message: str = "An internal error occurred", code: str = "DEPENDENCY_ERROR"):
        super().__init__(message, code=code)


class ConfigurationError(DependencyError):
    """Raised when required configuration is missing."""

    def __init__(self, message: str = "JWT_SECRET is not configured."):
        super().__init__(message, code="CONFIGURATION_ERROR")


class WebhookDeliveryError(DependencyError):
    """Raised when a webhook request cannot be delivered."""

    def __init__(
        self,
        message: str = (
            "Failed to send test message. Please check your webhook URL and try again."
        ),
    ):
        super().__init__(message, code="WEBHOOK_DELIVERY_FAILED")


class WebhookRejectedError(DomainException):
    """Raised when the webhook endpoint answers with an error status."""

    def __init__(self, message: str):
        super().__init__(message, code="WEBHOOK_REJECTED")

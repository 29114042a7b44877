"""
Helpers shared by the v1 views.
"""
import uuid

from rest_framework.request import Request

from core.domain.exceptions import AuthenticationError, ValidationError


def get_account_id(request: Request) -> uuid.UUID:
    """
    Return the authenticated account id set by the session middleware.

    Raises:
        AuthenticationError: If the request is not authenticated
    """
    account_id = getattr(request, "account_id", None)
    if account_id is None:
        raise AuthenticationError()
    return account_id


def validated(serializer_class, request: Request) -> dict:
    """
    Run a request serializer and return its validated data.

    Request serializers are permissive; anything they still reject
    (for example a JSON array body) is a malformed request.

    Raises:
        ValidationError: If the body cannot be read as the expected object
    """
    data = request.data
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        field, messages = next(iter(serializer.errors.items()))
        raise ValidationError(f"{field}: {messages[0]}" if isinstance(messages, list) else str(messages))
    return serializer.validated_data

"""
Error types raised by the service layer.

Every error carries the HTTP status code it maps to, so the
application can translate it into a response in one place (see
``main.create_app``).  Messages are meant for the client and must not
contain internal detail.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors that surface to the client."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class Conflict(ServiceError):
    # Duplicate unique fields are reported as a plain 400.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class SelfDeletionDenied(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Cannot delete your own account"


class InternalError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


class InvalidToken(Exception):
    """Raised by the token helpers when a token cannot be trusted.

    Not a ``ServiceError``; the auth gate translates it into
    ``Unauthenticated``.
    """

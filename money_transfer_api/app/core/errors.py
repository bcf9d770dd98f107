"""
Error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; ``main.create_app`` installs a single
handler that renders any ``ApiError`` as ``{"error": message}`` with
the class's status code.
"""

from fastapi import status


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ApiError):
    """A unique key is already taken.  Reported as 400 like other bad input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class PayloadTooLargeError(ApiError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class StorageError(ApiError):
    """The backing store could not be read or a flush did not complete."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


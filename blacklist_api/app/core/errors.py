"""
Error taxonomy for the registry service.

Services raise these exceptions; ``main.create_app`` registers a
handler that turns any ``RegistryError`` into a JSON body of the form
``{"error": "<message>"}`` with the matching HTTP status.
"""

from fastapi import status


class RegistryError(Exception):
    """Base class for all errors reported to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RegistryError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(RegistryError):
    """Wrong password or a missing/unknown admin token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(RegistryError):
    """The listing is restricted and no valid access code was given."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access restricted. Enter a valid code."


class NotFoundError(RegistryError):
    """Unknown pilot id or no approved pilot with the given nickname."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"

"""
Application error taxonomy.

Services raise these exceptions instead of ``HTTPException`` so that
business logic stays independent of the web layer.  Each class carries
the HTTP status it maps to; ``main.create_app`` registers a handler
that renders any of them as ``{"message": ...}``.
"""

from fastapi import status


class CardzenError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CardzenError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthRequiredError(CardzenError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token required"


class AuthInvalidError(CardzenError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class NotFoundError(CardzenError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class OwnershipError(CardzenError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed"


class InternalError(CardzenError):
    pass

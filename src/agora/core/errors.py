"""Domain error taxonomy shared by services and the API layer.

Services raise these exceptions; the handlers registered in ``agora.main``
translate them into ``{"error": message}`` responses with the matching
HTTP status code.
"""

from __future__ import annotations

from fastapi import status


class AgoraError(Exception):
    """Base class for all expected, request-terminating failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AgoraError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthenticated(AgoraError):
    """Missing, invalid or expired token, or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class Forbidden(AgoraError):
    """Authenticated, but not allowed to act on the target resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(AgoraError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(AgoraError):
    """Duplicate unique key.

    Reported as 400 to match the established API surface.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class InternalError(AgoraError):
    """Unexpected storage failure."""


__all__ = [
    "AgoraError",
    "ValidationError",
    "Unauthenticated",
    "Forbidden",
    "NotFound",
    "Conflict",
    "InternalError",
]

"""Custom exceptions for Easy Search Core.

Every error surfaced through the API derives from EasySearchError and
carries a human-readable message plus an optional details dict. The
Flask error handlers in main.py map each class to an HTTP status code.
"""


class EasySearchError(Exception):
    """Base exception for all Easy Search errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(EasySearchError):
    """Missing or malformed input (HTTP 400)."""


class UnauthorizedError(EasySearchError):
    """Bad credentials, invalid token, or inactive account (HTTP 401).

    Messages stay generic so that responses cannot be used to enumerate
    accounts or probe token validity.
    """


class ForbiddenError(EasySearchError):
    """Request is authenticated but not allowed here (HTTP 403)."""


class ResourceNotFound(EasySearchError):
    """Requested resource does not exist (HTTP 404)."""


class ConflictError(EasySearchError):
    """Resource already exists (HTTP 409)."""


class InternalError(EasySearchError):
    """Unexpected failure; message hidden from clients in production (HTTP 500)."""


class DatabaseError(InternalError):
    """Store operation failed."""

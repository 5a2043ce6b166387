"""
Exception hierarchy for the users API.

Every error raised by the service layers inherits from UsersApiError and
carries a user-facing message that is safe to return to HTTP clients.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class UsersApiError(Exception):
    """Base exception for all users API errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or "An error occurred. Please try again."
        self.details = details or {}


# -----------------------------------------------------------------------------
# Startup (fatal)
# -----------------------------------------------------------------------------


class CredentialError(UsersApiError):
    """Raised when database credentials cannot be read from the secrets store."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            user_message="Service configuration error.",
            **kwargs,
        )


class DatabaseConnectionError(UsersApiError):
    """Raised when the database connection cannot be established or pinged."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            user_message="Database connection failed. Please try again.",
            **kwargs,
        )


# -----------------------------------------------------------------------------
# Validation (client errors)
# -----------------------------------------------------------------------------


class ValidationError(UsersApiError):
    """Raised when input validation fails. The message is safe to show."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("user_message", message)
        super().__init__(message, **kwargs)


class InvalidIdentifierError(ValidationError):
    """Raised when a user ID is not a valid document identifier."""

    def __init__(self, user_id: Any):
        super().__init__(
            f"Invalid user ID: {user_id!r}",
            details={"user_id": user_id},
        )
        self.user_id = user_id


class InvalidInputError(ValidationError):
    """Raised when a user field fails validation."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class WeakPasswordError(ValidationError):
    """Raised when a password does not satisfy the strength policy."""
    pass


# -----------------------------------------------------------------------------
# Lookup
# -----------------------------------------------------------------------------


class UserNotFoundError(UsersApiError):
    """Raised when no user matches the given ID."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            user_message="User not found",
            details={"user_id": user_id},
        )
        self.user_id = user_id


# -----------------------------------------------------------------------------
# Storage / unexpected
# -----------------------------------------------------------------------------


class StorageError(UsersApiError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            user_message="Database operation failed. Please try again.",
            **kwargs,
        )
        self.operation = operation


class InternalError(UsersApiError):
    """Raised for unexpected failures."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            user_message="Something went wrong. Please try again.",
            **kwargs,
        )


# -----------------------------------------------------------------------------
# Safe user-facing message
# -----------------------------------------------------------------------------

def get_user_message(exc: BaseException) -> str:
    """
    Return a safe, user-facing message for any exception.
    Use this at API boundaries so internal details are never exposed.
    """
    if isinstance(exc, UsersApiError) and getattr(exc, "user_message", None):
        return exc.user_message
    return "Something went wrong. Please try again."

"""
Base exception classes for the Contraqo backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class ContraqoError(Exception):
    """
    Base exception for all Contraqo errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ContraqoError):
    """Resource not found."""

    pass


class ValidationError(ContraqoError):
    """Input validation failed."""

    pass


class ConflictError(ContraqoError):
    """The resource changed since the caller last read it."""

    pass


class VersionConflictError(ConflictError):
    """Raised when a caller presents a stale optimistic-lock version."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Version conflict. Expected {expected}, got {actual}. "
            "Please refresh and try again.",
            code="VERSION_CONFLICT",
            details={"expected": expected, "actual": actual},
        )


class ExternalServiceError(ContraqoError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service

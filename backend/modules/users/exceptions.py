"""
Users module exceptions.

These exceptions are raised by the users module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user lookup by ID or email finds nothing."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class DuplicateEmailError(ConflictError):
    """Raised when creating a user whose email is already registered."""

    def __init__(self, email: str):
        super().__init__(
            f"Email already registered: {email}",
            code="DUPLICATE_EMAIL",
            details={"email": email},
        )

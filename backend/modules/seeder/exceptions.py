"""
Seeder module exceptions.

Any of these aborts the seeding run; the CLI turns them into a logged
error and a non-zero exit code.
"""

from shared.exceptions import ContraqoError, ExternalServiceError


class SeedDataError(ExternalServiceError):
    """Raised when a seed file is missing, unreadable or malformed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Seed data loading failed: {reason}",
            service="seed_file",
            code="SEED_DATA_INVALID",
            details={"path": path, "reason": reason},
        )


class SeedRecordError(ContraqoError):
    """Raised when a single seed record cannot be created."""

    def __init__(self, email: str, reason: str):
        super().__init__(
            f"Failed to create user {email}: {reason}",
            code="SEED_RECORD_FAILED",
            details={"email": email, "reason": reason},
        )
        self.email = email

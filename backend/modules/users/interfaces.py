"""
Users module interfaces.

Services and the seeder depend on these protocols, not on a concrete
storage backend. Both the Supabase repositories and the in-memory ones
satisfy them.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .dto import CreateUserCredentialDto, CreateUserDto
from .models import User, UserCredential


@runtime_checkable
class IUserRepository(Protocol):
    """Persistence contract for the users table."""

    def create(self, dto: CreateUserDto) -> User:
        """
        Build an unsaved User from validated input.

        Nothing is written until save() is called.
        """
        ...

    def save(self, user: User) -> User:
        """
        Insert a new user or update an existing one.

        Updates are version-checked: the stored version must equal
        ``user.audit.version``, which is then incremented.

        Raises:
            VersionConflictError: If the stored user changed since it was loaded
        """
        ...

    def count(self) -> int:
        """Count all users, soft-deleted ones included."""
        ...

    def delete(self, filters: Optional[dict[str, Any]] = None) -> int:
        """
        Hard-delete users matching column filters (all users when empty).

        Returns:
            Number of users removed
        """
        ...

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user with its credentials loaded, or None."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email with its credentials loaded, or None."""
        ...


@runtime_checkable
class ICredentialRepository(Protocol):
    """Persistence contract for the user_credentials table."""

    def create(self, dto: CreateUserCredentialDto) -> UserCredential:
        """Build an unsaved UserCredential from validated input."""
        ...

    def save(self, credential: UserCredential) -> UserCredential:
        """Insert or version-checked update of a credential."""
        ...

    def count(self) -> int:
        """Count all credentials."""
        ...

    def delete(self, filters: Optional[dict[str, Any]] = None) -> int:
        """Hard-delete credentials matching column filters (all when empty)."""
        ...

    def list_for_user(self, user_id: str) -> list[UserCredential]:
        """All credentials owned by a user, oldest first."""
        ...

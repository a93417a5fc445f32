"""
User and credential repositories.

Encapsulates all Supabase queries and data mapping for the account tables:
- users
- user_credentials

In-memory variants with the same contract are provided for tests and
for running the seeder without a database.
"""

from typing import Any, Optional

from shared.database import get_supabase_client
from shared.repository import (
    BaseRepository,
    InMemoryRepository,
    audit_to_row,
    isoformat_or_none,
    map_to_audit,
)

from .dto import CreateUserCredentialDto, CreateUserDto
from .enums import ProviderType
from .exceptions import DuplicateEmailError
from .models import User, UserCredential


USERS_TABLE = "users"
CREDENTIALS_TABLE = "user_credentials"


# -------------------------------------------------------------------------
# Row mapping
# -------------------------------------------------------------------------


def user_to_row(user: User) -> dict[str, Any]:
    """Map a User to its users-table columns. Credentials are not included."""
    return {
        **audit_to_row(user.audit),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "phone": user.phone,
        "email_verified": user.email_verified,
        "is_active": user.is_active,
        "trial_ends_at": isoformat_or_none(user.trial_ends_at),
        "is_subscribed": user.is_subscribed,
    }


def map_to_user(data: dict[str, Any], credentials: Optional[list[UserCredential]] = None) -> User:
    """Map a users row (optionally with embedded credentials) to a User."""
    if credentials is None:
        credentials = [map_to_credential(c) for c in data.get(CREDENTIALS_TABLE) or []]

    return User(
        audit=map_to_audit(data),
        email=data["email"],
        first_name=data.get("first_name"),
        last_name=data.get("last_name"),
        phone=data.get("phone"),
        email_verified=data.get("email_verified", False),
        is_active=data.get("is_active", True),
        trial_ends_at=data["trial_ends_at"],
        is_subscribed=data.get("is_subscribed", False),
        credentials=credentials,
    )


def credential_to_row(credential: UserCredential) -> dict[str, Any]:
    """Map a UserCredential to its user_credentials-table columns."""
    return {
        **audit_to_row(credential.audit),
        "user_id": credential.user_id,
        "provider_type": credential.provider_type.value,
        "provider_id": credential.provider_id,
        "credential_data": credential.credential_data,
        "is_primary": credential.is_primary,
        "is_verified": credential.is_verified,
        "last_used_at": isoformat_or_none(credential.last_used_at),
        "expires_at": isoformat_or_none(credential.expires_at),
        "metadata": credential.metadata,
    }


def map_to_credential(data: dict[str, Any]) -> UserCredential:
    """Map a user_credentials row to a UserCredential."""
    return UserCredential(
        audit=map_to_audit(data),
        user_id=str(data["user_id"]),
        provider_type=ProviderType(data["provider_type"]),
        provider_id=data["provider_id"],
        credential_data=data["credential_data"],
        is_primary=data.get("is_primary", False),
        is_verified=data.get("is_verified", False),
        last_used_at=data.get("last_used_at"),
        expires_at=data.get("expires_at"),
        metadata=data.get("metadata"),
    )


# -------------------------------------------------------------------------
# Supabase
# -------------------------------------------------------------------------


class SupabaseUserRepository(BaseRepository[User]):
    """
    Repository for the users table.

    Note: Saving a user does not save its credentials; they live in their
    own table and go through SupabaseCredentialRepository.
    """

    table = USERS_TABLE

    def create(self, dto: CreateUserDto) -> User:
        return dto.to_user()

    def save(self, user: User) -> User:
        self._write(user.audit, user_to_row(user))
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        result = (
            self._db.table(self.table)
            .select(f"*, {CREDENTIALS_TABLE}(*)")
            .eq("id", user_id)
            .execute()
        )
        if not result.data:
            return None
        return map_to_user(result.data[0])

    def get_by_email(self, email: str) -> Optional[User]:
        result = (
            self._db.table(self.table)
            .select(f"*, {CREDENTIALS_TABLE}(*)")
            .eq("email", email)
            .execute()
        )
        if not result.data:
            return None
        return map_to_user(result.data[0])


class SupabaseCredentialRepository(BaseRepository[UserCredential]):
    """Repository for the user_credentials table."""

    table = CREDENTIALS_TABLE

    def create(self, dto: CreateUserCredentialDto) -> UserCredential:
        return dto.to_credential()

    def save(self, credential: UserCredential) -> UserCredential:
        self._write(credential.audit, credential_to_row(credential))
        return credential

    def list_for_user(self, user_id: str) -> list[UserCredential]:
        result = (
            self._db.table(self.table)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at")
            .execute()
        )
        return [map_to_credential(row) for row in result.data]


# -------------------------------------------------------------------------
# In-memory
# -------------------------------------------------------------------------


class InMemoryCredentialRepository(InMemoryRepository[UserCredential]):
    """Credential storage in a dict. For testing and development."""

    def create(self, dto: CreateUserCredentialDto) -> UserCredential:
        return dto.to_credential()

    def save(self, credential: UserCredential) -> UserCredential:
        return self._write(credential)

    def list_for_user(self, user_id: str) -> list[UserCredential]:
        owned = [c for c in self._rows.values() if c.user_id == user_id]
        owned.sort(key=lambda c: c.audit.created_at)
        return [c.model_copy(deep=True) for c in owned]

    def _to_row(self, entity: UserCredential) -> dict[str, Any]:
        return credential_to_row(entity)


class InMemoryUserRepository(InMemoryRepository[User]):
    """
    User storage in a dict. For testing and development.

    Enforces the unique email constraint. When given the credential
    repository, lookups return users with their credentials loaded, as
    the embedded select does in Supabase.
    """

    def __init__(self, credentials: Optional[InMemoryCredentialRepository] = None) -> None:
        super().__init__()
        self._credentials = credentials

    def create(self, dto: CreateUserDto) -> User:
        return dto.to_user()

    def save(self, user: User) -> User:
        for stored in self._rows.values():
            if stored.email == user.email and stored.id != user.id:
                raise DuplicateEmailError(user.email)
        return self._write(user)

    def get_by_id(self, user_id: str) -> Optional[User]:
        stored = self._rows.get(user_id)
        return self._load(stored) if stored is not None else None

    def get_by_email(self, email: str) -> Optional[User]:
        stored = next((u for u in self._rows.values() if u.email == email), None)
        return self._load(stored) if stored is not None else None

    def _load(self, stored: User) -> User:
        user = stored.model_copy(deep=True)
        if self._credentials is not None:
            user.credentials = self._credentials.list_for_user(user.id)
        return user

    def _snapshot(self, entity: User) -> User:
        snapshot = entity.model_copy(deep=True)
        snapshot.credentials = []
        return snapshot

    def _to_row(self, entity: User) -> dict[str, Any]:
        return user_to_row(entity)


# Module-level instance getters
_user_repository: Optional[SupabaseUserRepository] = None
_credential_repository: Optional[SupabaseCredentialRepository] = None


def get_user_repository() -> SupabaseUserRepository:
    """Get the Supabase-backed user repository singleton."""
    global _user_repository
    if _user_repository is None:
        _user_repository = SupabaseUserRepository(get_supabase_client())
    return _user_repository


def get_credential_repository() -> SupabaseCredentialRepository:
    """Get the Supabase-backed credential repository singleton."""
    global _credential_repository
    if _credential_repository is None:
        _credential_repository = SupabaseCredentialRepository(get_supabase_client())
    return _credential_repository


def reset_repositories() -> None:
    """Reset the repository singletons (for testing)."""
    global _user_repository, _credential_repository
    _user_repository = None
    _credential_repository = None

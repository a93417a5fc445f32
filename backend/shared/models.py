"""
Shared data models used across modules.

AuditTrail is the field-set every persisted entity embeds: identity,
timestamps, soft-delete marker, optimistic-lock version and the actors
behind each lifecycle action. Entities hold it by composition under the
``audit`` attribute rather than inheriting from a base entity class.
"""

import uuid
from datetime import datetime, timezone
from typing import Annotated, Optional, Protocol, runtime_checkable

from pydantic import AfterValidator, BaseModel, Field

from .exceptions import VersionConflictError


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _assume_utc(value: datetime) -> datetime:
    # Naive timestamps from seed files and drivers are treated as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UTCDateTime = Annotated[datetime, AfterValidator(_assume_utc)]


class AuditTrail(BaseModel):
    """
    Identity, audit and versioning fields for a persisted entity.

    Column mapping:
        id -> id, created_at -> created_at, updated_at -> updated_at,
        deleted_at -> deleted_at, version -> version,
        created_by -> created_by_user_id, updated_by -> updated_by_user_id,
        deleted_by -> deleted_by_user_id
    """

    model_config = {"validate_assignment": True}

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), frozen=True)
    created_at: UTCDateTime = Field(default_factory=utcnow)
    updated_at: UTCDateTime = Field(default_factory=utcnow)
    deleted_at: Optional[UTCDateTime] = None
    version: int = Field(default=1, ge=1)

    # Back-references to the acting user; never cascade
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    deleted_by: Optional[str] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def last_modified(self) -> str:
        """Human-readable age of the last update."""
        diff_minutes = int((utcnow() - self.updated_at).total_seconds() // 60)

        if diff_minutes < 1:
            return "Just now"
        if diff_minutes < 60:
            return f"{diff_minutes} minutes ago"
        if diff_minutes < 1440:
            return f"{diff_minutes // 60} hours ago"
        return f"{diff_minutes // 1440} days ago"

    def set_created_by(self, actor_id: str) -> None:
        self.created_by = actor_id

    def set_updated_by(self, actor_id: str) -> None:
        self.updated_by = actor_id

    def set_deleted_by(self, actor_id: str) -> None:
        self.deleted_by = actor_id

    def soft_delete(self, actor_id: Optional[str] = None) -> None:
        """Mark the entity as deleted, recording the actor when given."""
        self.deleted_at = utcnow()
        if actor_id:
            self.set_deleted_by(actor_id)

    def restore(self) -> None:
        """Clear the deletion marker and its actor."""
        self.deleted_at = None
        self.deleted_by = None

    def check_version(self, expected_version: int) -> None:
        """
        Verify the caller is working from the current version.

        Raises:
            VersionConflictError: If expected_version differs from the stored version
        """
        if self.version != expected_version:
            raise VersionConflictError(expected=expected_version, actual=self.version)


@runtime_checkable
class Auditable(Protocol):
    """
    Capability shared by every persisted entity.

    Repositories rely on this to read identity and version, and to bump
    the version after a successful write.
    """

    audit: AuditTrail

    @property
    def is_deleted(self) -> bool:
        ...

    def soft_delete(self, actor_id: Optional[str] = None) -> None:
        ...

    def restore(self) -> None:
        ...

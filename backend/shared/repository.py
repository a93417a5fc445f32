"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the optimistic-locking write path shared by
every audited table.
"""

from datetime import datetime
from typing import Any, Optional, TypeVar, Generic
from supabase import Client

from .exceptions import VersionConflictError
from .models import AuditTrail, Auditable, utcnow


T = TypeVar("T", bound=Auditable)

# PostgREST refuses unfiltered deletes; no generated id equals the nil UUID.
NIL_UUID = "00000000-0000-0000-0000-000000000000"


def isoformat_or_none(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def audit_to_row(audit: AuditTrail) -> dict[str, Any]:
    """Flatten an AuditTrail into its table columns."""
    return {
        "id": audit.id,
        "created_at": isoformat_or_none(audit.created_at),
        "updated_at": isoformat_or_none(audit.updated_at),
        "deleted_at": isoformat_or_none(audit.deleted_at),
        "version": audit.version,
        "created_by_user_id": audit.created_by,
        "updated_by_user_id": audit.updated_by,
        "deleted_by_user_id": audit.deleted_by,
    }


def map_to_audit(data: dict[str, Any]) -> AuditTrail:
    """Map the audit columns of a database row to an AuditTrail."""
    return AuditTrail(
        id=str(data["id"]),
        created_at=data["created_at"],
        updated_at=data["updated_at"],
        deleted_at=data.get("deleted_at"),
        version=data.get("version", 1),
        created_by=data.get("created_by_user_id"),
        updated_by=data.get("updated_by_user_id"),
        deleted_by=data.get("deleted_by_user_id"),
    )


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Audit column mapping for tables that embed AuditTrail
    - Version-checked writes for save()

    Subclasses set ``table`` and handle dict-to-model mapping internally.

    Example:
        class UserRepository(BaseRepository[User]):
            table = "users"

            def get_by_id(self, user_id: str) -> Optional[User]:
                result = self._db.table(self.table).select("*").eq("id", user_id).execute()
                if not result.data:
                    return None
                return self._map_to_user(result.data[0])
    """

    table: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    # -------------------------------------------------------------------------
    # Shared table operations
    # -------------------------------------------------------------------------

    def count(self) -> int:
        """Count all rows in the table, soft-deleted rows included."""
        result = self._db.table(self.table).select("id", count="exact").execute()
        return result.count or 0

    def delete(self, filters: Optional[dict[str, Any]] = None) -> int:
        """
        Hard-delete rows matching the equality filters.

        Args:
            filters: Column/value pairs; every row is deleted when empty.

        Returns:
            Number of rows removed.
        """
        query = self._db.table(self.table).delete()
        if filters:
            for column, value in filters.items():
                query = query.eq(column, value)
        else:
            query = query.neq("id", NIL_UUID)
        result = query.execute()
        return len(result.data or [])

    # -------------------------------------------------------------------------
    # Versioned writes
    # -------------------------------------------------------------------------

    def _write(self, audit: AuditTrail, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new row or update an existing one under optimistic locking.

        The update only matches when the stored version still equals the
        version the caller loaded. On success the audit trail is advanced
        to the stored version and timestamp.

        Raises:
            VersionConflictError: If the stored row has moved on.
        """
        existing = (
            self._db.table(self.table).select("version").eq("id", audit.id).execute()
        )

        if not existing.data:
            result = self._db.table(self.table).insert(row).execute()
            return result.data[0]

        now = utcnow()
        row = {**row, "version": audit.version + 1, "updated_at": now.isoformat()}
        result = (
            self._db.table(self.table)
            .update(row)
            .eq("id", audit.id)
            .eq("version", audit.version)
            .execute()
        )
        if not result.data:
            raise VersionConflictError(
                expected=audit.version,
                actual=int(existing.data[0]["version"]),
            )

        audit.version += 1
        audit.updated_at = now
        return result.data[0]


class InMemoryRepository(Generic[T]):
    """
    Dict-backed repository with the same contract as the Supabase ones.

    For testing and local development. Rows are stored as deep copies, so
    callers only see changes they save. Subclasses provide ``_to_row`` so
    that delete filters match on column names, as they would in Postgres.
    """

    def __init__(self) -> None:
        self._rows: dict[str, T] = {}

    def count(self) -> int:
        return len(self._rows)

    def delete(self, filters: Optional[dict[str, Any]] = None) -> int:
        doomed = [
            entity_id
            for entity_id, entity in self._rows.items()
            if not filters
            or all(self._to_row(entity).get(k) == v for k, v in filters.items())
        ]
        for entity_id in doomed:
            del self._rows[entity_id]
        return len(doomed)

    def _write(self, entity: T) -> T:
        audit: AuditTrail = entity.audit
        stored = self._rows.get(audit.id)

        if stored is not None:
            stored_version = stored.audit.version
            if stored_version != audit.version:
                raise VersionConflictError(expected=audit.version, actual=stored_version)
            audit.version += 1
            audit.updated_at = utcnow()

        self._rows[audit.id] = self._snapshot(entity)
        return entity

    def _snapshot(self, entity: T) -> T:
        return entity.model_copy(deep=True)

    def _to_row(self, entity: T) -> dict[str, Any]:
        raise NotImplementedError

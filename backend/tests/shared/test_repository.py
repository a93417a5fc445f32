"""Tests for shared/repository.py."""

import pytest
from typing import Any
from unittest.mock import MagicMock

from pydantic import BaseModel, Field

from shared.exceptions import VersionConflictError
from shared.models import AuditTrail
from shared.repository import (
    NIL_UUID,
    BaseRepository,
    InMemoryRepository,
    audit_to_row,
    map_to_audit,
)


class Widget(BaseModel):
    audit: AuditTrail = Field(default_factory=AuditTrail)
    name: str

    @property
    def is_deleted(self) -> bool:
        return self.audit.is_deleted

    def soft_delete(self, actor_id=None) -> None:
        self.audit.soft_delete(actor_id)

    def restore(self) -> None:
        self.audit.restore()


class WidgetRepository(BaseRepository[Widget]):
    table = "widgets"

    def save(self, widget: Widget) -> Widget:
        self._write(widget.audit, {**audit_to_row(widget.audit), "name": widget.name})
        return widget


class InMemoryWidgetRepository(InMemoryRepository[Widget]):
    def save(self, widget: Widget) -> Widget:
        return self._write(widget)

    def get(self, widget_id: str) -> Widget:
        return self._rows[widget_id]

    def _to_row(self, entity: Widget) -> dict[str, Any]:
        return {**audit_to_row(entity.audit), "name": entity.name}


class TestAuditMapping:
    def test_audit_to_row_uses_column_names(self):
        """Actor fields should map to the *_user_id columns."""
        audit = AuditTrail(created_by="u1", updated_by="u2")
        row = audit_to_row(audit)

        assert row["id"] == audit.id
        assert row["version"] == 1
        assert row["created_by_user_id"] == "u1"
        assert row["updated_by_user_id"] == "u2"
        assert row["deleted_by_user_id"] is None
        assert row["deleted_at"] is None
        assert isinstance(row["created_at"], str)

    def test_map_to_audit_reads_row(self):
        """A database row should map back to an equal AuditTrail."""
        audit = AuditTrail(created_by="u1")
        audit.soft_delete("u3")

        restored = map_to_audit(audit_to_row(audit))

        assert restored == audit


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the database client in _db attribute."""
        mock_db = MagicMock()
        repo = WidgetRepository(mock_db)
        assert repo._db is mock_db

    def test_count(self):
        """Should request an exact count of the table."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.count = 7

        assert WidgetRepository(mock_db).count() == 7
        mock_db.table.assert_called_with("widgets")
        mock_db.table.return_value.select.assert_called_with("id", count="exact")

    def test_count_treats_missing_count_as_zero(self):
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.count = None

        assert WidgetRepository(mock_db).count() == 0

    def test_delete_all_uses_catch_all_filter(self):
        """An unfiltered delete should still carry a filter PostgREST accepts."""
        mock_db = MagicMock()
        delete_query = mock_db.table.return_value.delete.return_value
        delete_query.neq.return_value.execute.return_value.data = [{"id": "a"}, {"id": "b"}]

        removed = WidgetRepository(mock_db).delete()

        assert removed == 2
        delete_query.neq.assert_called_once_with("id", NIL_UUID)

    def test_delete_with_filters(self):
        mock_db = MagicMock()
        delete_query = mock_db.table.return_value.delete.return_value
        delete_query.eq.return_value.execute.return_value.data = [{"id": "a"}]

        removed = WidgetRepository(mock_db).delete({"name": "gear"})

        assert removed == 1
        delete_query.eq.assert_called_once_with("name", "gear")

    def test_save_inserts_new_row(self):
        """A row that does not exist yet should be inserted unchanged."""
        mock_db = MagicMock()
        table = mock_db.table.return_value
        table.select.return_value.eq.return_value.execute.return_value.data = []
        table.insert.return_value.execute.return_value.data = [{"id": "x"}]

        widget = Widget(name="gear")
        WidgetRepository(mock_db).save(widget)

        inserted = table.insert.call_args[0][0]
        assert inserted["id"] == widget.audit.id
        assert inserted["name"] == "gear"
        assert inserted["version"] == 1
        assert widget.audit.version == 1
        table.update.assert_not_called()

    def test_save_updates_with_version_check(self):
        """Updates should filter on the loaded version and bump it."""
        mock_db = MagicMock()
        table = mock_db.table.return_value
        table.select.return_value.eq.return_value.execute.return_value.data = [{"version": 2}]
        update_query = table.update.return_value.eq.return_value.eq.return_value
        update_query.execute.return_value.data = [{"id": "x"}]

        widget = Widget(name="gear", audit=AuditTrail(version=2))
        WidgetRepository(mock_db).save(widget)

        updated = table.update.call_args[0][0]
        assert updated["version"] == 3
        table.update.return_value.eq.assert_called_once_with("id", widget.audit.id)
        table.update.return_value.eq.return_value.eq.assert_called_once_with("version", 2)
        assert widget.audit.version == 3

    def test_save_raises_on_stale_version(self):
        """Zero rows updated means someone else saved first."""
        mock_db = MagicMock()
        table = mock_db.table.return_value
        table.select.return_value.eq.return_value.execute.return_value.data = [{"version": 5}]
        update_query = table.update.return_value.eq.return_value.eq.return_value
        update_query.execute.return_value.data = []

        widget = Widget(name="gear", audit=AuditTrail(version=4))

        with pytest.raises(VersionConflictError) as exc_info:
            WidgetRepository(mock_db).save(widget)

        assert exc_info.value.details == {"expected": 4, "actual": 5}
        assert widget.audit.version == 4


class TestInMemoryRepository:
    def test_first_save_keeps_version(self):
        repo = InMemoryWidgetRepository()
        widget = repo.save(Widget(name="gear"))

        assert widget.audit.version == 1
        assert repo.count() == 1

    def test_second_save_bumps_version(self):
        repo = InMemoryWidgetRepository()
        widget = repo.save(Widget(name="gear"))
        widget.name = "cog"
        repo.save(widget)

        assert widget.audit.version == 2
        assert repo.get(widget.audit.id).name == "cog"

    def test_stored_copy_is_isolated(self):
        """Unsaved changes should not leak into storage."""
        repo = InMemoryWidgetRepository()
        widget = repo.save(Widget(name="gear"))
        widget.name = "changed"

        assert repo.get(widget.audit.id).name == "gear"

    def test_stale_copy_conflicts(self):
        repo = InMemoryWidgetRepository()
        widget = repo.save(Widget(name="gear"))
        stale = widget.model_copy(deep=True)

        repo.save(widget)

        with pytest.raises(VersionConflictError):
            repo.save(stale)

    def test_delete_all(self):
        repo = InMemoryWidgetRepository()
        repo.save(Widget(name="a"))
        repo.save(Widget(name="b"))

        assert repo.delete() == 2
        assert repo.count() == 0

    def test_delete_with_filters(self):
        repo = InMemoryWidgetRepository()
        repo.save(Widget(name="a"))
        repo.save(Widget(name="b"))

        assert repo.delete({"name": "a"}) == 1
        assert repo.count() == 1

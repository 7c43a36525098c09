# =============================================================================
# tests/test_record_store.py - In-Memory Record Store Tests
# =============================================================================
# This module contains tests for:
# - Store-assigned ids and timestamps
# - Newest-first listing with equality filters
# - Owner-conditional update and delete
# =============================================================================

import pytest

from app.exceptions import RecordStoreError
from lib.record_store import InMemoryRecordStore


class TestInsertAndFetch:
    """Test record creation and lookup."""

    def test_insert_assigns_id_and_timestamps(self, store):
        """The store owns id, created_at and updated_at."""
        record = store.insert("projects", {"user_id": "u1", "name": "Shoes"})

        assert record["id"]
        assert record["created_at"] == record["updated_at"]
        assert record["name"] == "Shoes"

    def test_images_have_no_updated_at(self, store):
        """Images are immutable, so only created_at is stamped."""
        record = store.insert("images", {"user_id": "u1", "project_id": "p1"})

        assert "created_at" in record
        assert "updated_at" not in record

    def test_fetch_returns_copy(self, store):
        """Mutating a fetched record does not change the stored one."""
        record = store.insert("projects", {"user_id": "u1", "name": "Shoes"})
        fetched = store.fetch("projects", record["id"])
        fetched["name"] = "Changed"

        assert store.fetch("projects", record["id"])["name"] == "Shoes"

    def test_fetch_missing_returns_none(self, store):
        assert store.fetch("projects", "does-not-exist") is None

    def test_unknown_table_rejected(self, store):
        with pytest.raises(RecordStoreError) as exc_info:
            store.insert("sessions", {"user_id": "u1"})

        assert exc_info.value.code == "UNKNOWN_TABLE"

    def test_timestamps_strictly_increase(self, store):
        """Back-to-back inserts never share a created_at."""
        stamps = [store.insert("projects", {"user_id": "u1", "name": str(i)})["created_at"] for i in range(50)]

        assert stamps == sorted(stamps)
        assert len(set(stamps)) == len(stamps)


class TestSelect:
    """Test filtered, ordered listing."""

    def test_newest_first(self, store):
        first = store.insert("projects", {"user_id": "u1", "name": "A"})
        second = store.insert("projects", {"user_id": "u1", "name": "B"})

        rows = store.select("projects", {"user_id": "u1"})

        assert [r["id"] for r in rows] == [second["id"], first["id"]]

    def test_filters_are_anded(self, store):
        store.insert("images", {"user_id": "u1", "project_id": "p1"})
        wanted = store.insert("images", {"user_id": "u1", "project_id": "p2"})
        store.insert("images", {"user_id": "u2", "project_id": "p2"})

        rows = store.select("images", {"user_id": "u1", "project_id": "p2"})

        assert [r["id"] for r in rows] == [wanted["id"]]

    def test_no_matches(self, store):
        assert store.select("projects", {"user_id": "nobody"}) == []


class TestConditionalWrites:
    """Test owner-conditional update and delete."""

    def test_update_bumps_updated_at(self, store):
        record = store.insert("projects", {"user_id": "u1", "name": "A"})

        updated = store.update("projects", record["id"], {"name": "B"}, owner_id="u1")

        assert updated["name"] == "B"
        assert updated["updated_at"] > record["updated_at"]
        assert updated["created_at"] == record["created_at"]

    def test_update_ignores_protected_columns(self, store):
        """id, user_id and created_at cannot be patched."""
        record = store.insert("projects", {"user_id": "u1", "name": "A"})

        updated = store.update(
            "projects", record["id"], {"user_id": "u2", "id": "other", "name": "B"}
        )

        assert updated["user_id"] == "u1"
        assert updated["id"] == record["id"]

    def test_update_with_wrong_owner_is_noop(self, store):
        record = store.insert("projects", {"user_id": "u1", "name": "A"})

        assert store.update("projects", record["id"], {"name": "B"}, owner_id="u2") is None
        assert store.fetch("projects", record["id"])["name"] == "A"

    def test_update_missing_returns_none(self, store):
        assert store.update("projects", "missing", {"name": "B"}) is None

    def test_delete_with_wrong_owner_is_noop(self, store):
        record = store.insert("projects", {"user_id": "u1", "name": "A"})

        assert store.delete("projects", record["id"], owner_id="u2") is False
        assert store.fetch("projects", record["id"]) is not None

    def test_delete(self, store):
        record = store.insert("projects", {"user_id": "u1", "name": "A"})

        assert store.delete("projects", record["id"], owner_id="u1") is True
        assert store.fetch("projects", record["id"]) is None
        assert store.delete("projects", record["id"]) is False

    def test_ping_is_noop(self):
        InMemoryRecordStore().ping()

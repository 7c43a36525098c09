# =============================================================================
# lib/record_store.py - Record Store Contract + In-Memory Backend
# =============================================================================
# The services talk to a RecordStore, never to a database client directly.
# A store offers single-record insert / fetch / conditional update /
# conditional delete plus filtered listing ordered by created_at.
#
# Timestamps belong to the store: insert stamps created_at (and updated_at
# for tables that track it), update stamps updated_at. Callers never supply
# them. Stamps are strictly increasing per store instance so that listings
# have a stable newest-first order.
#
# Backends:
# - InMemoryRecordStore: dict-backed, thread-safe, for development and tests
# - SupabaseRecordStore (lib/supabase_client.py): production
# =============================================================================

from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any

from app.exceptions import RecordStoreError

logger = logging.getLogger(__name__)

# Table name -> timestamp columns the store maintains
TABLE_TIMESTAMPS: dict[str, tuple[str, ...]] = {
    "projects": ("created_at", "updated_at"),
    "images": ("created_at",),
}

OWNER_COLUMN = "user_id"


class RecordStore(ABC):
    """
    Minimal record store used by the ownership-scoped services.

    Records are plain dicts. Every table has an `id` primary key and an
    owner column (`user_id`).
    """

    def __init__(self) -> None:
        self._clock_lock = threading.Lock()
        self._last_stamp: datetime | None = None

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------

    def _now(self) -> datetime:
        """Current UTC time, strictly later than any stamp issued before."""
        with self._clock_lock:
            now = datetime.now(timezone.utc)
            if self._last_stamp is not None and now <= self._last_stamp:
                now = self._last_stamp + timedelta(microseconds=1)
            self._last_stamp = now
            return now

    def _prepare_insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        record = dict(data)
        record["id"] = str(uuid.uuid4())
        now = self._now()
        for column in _timestamps_for(table):
            record[column] = now
        return record

    def _prepare_update(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        changes = {k: v for k, v in data.items() if k not in ("id", OWNER_COLUMN, "created_at")}
        if "updated_at" in _timestamps_for(table):
            changes["updated_at"] = self._now()
        return changes

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    @abstractmethod
    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a record; the store assigns `id` and timestamps."""

    @abstractmethod
    def fetch(self, table: str, record_id: str) -> dict[str, Any] | None:
        """Fetch one record by id, or None."""

    @abstractmethod
    def select(self, table: str, filters: dict[str, str]) -> list[dict[str, Any]]:
        """All records matching every equality filter, newest first."""

    @abstractmethod
    def update(
        self,
        table: str,
        record_id: str,
        data: dict[str, Any],
        *,
        owner_id: str | None = None,
    ) -> dict[str, Any] | None:
        """
        Patch one record.

        When owner_id is given the patch applies only if the record is still
        owned by it; the check and the write are a single atomic step.

        Returns:
            The updated record, or None if nothing matched
        """

    @abstractmethod
    def delete(self, table: str, record_id: str, *, owner_id: str | None = None) -> bool:
        """Delete one record (conditionally on owner). True if a row was removed."""

    def ping(self) -> None:
        """Raise if the store is unreachable."""


def _timestamps_for(table: str) -> tuple[str, ...]:
    try:
        return TABLE_TIMESTAMPS[table]
    except KeyError:
        raise RecordStoreError(f"Unknown table: {table}", code="UNKNOWN_TABLE", details={"table": table})


class InMemoryRecordStore(RecordStore):
    """
    Dict-backed record store.

    A single re-entrant lock serializes every operation, which makes each
    conditional update/delete atomic with respect to other writers.
    """

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.RLock()
        self._tables: dict[str, dict[str, dict[str, Any]]] = {
            table: {} for table in TABLE_TIMESTAMPS
        }
        # Insertion sequence breaks created_at ties deterministically
        self._sequence: dict[str, int] = {}
        self._counter = 0

    def _table(self, table: str) -> dict[str, dict[str, Any]]:
        _timestamps_for(table)
        return self._tables[table]

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            rows = self._table(table)
            record = self._prepare_insert(table, data)
            rows[record["id"]] = record
            self._counter += 1
            self._sequence[record["id"]] = self._counter
            logger.debug(f"Inserted {table}/{record['id']}")
            return dict(record)

    def fetch(self, table: str, record_id: str) -> dict[str, Any] | None:
        with self._lock:
            record = self._table(table).get(record_id)
            return dict(record) if record is not None else None

    def select(self, table: str, filters: dict[str, str]) -> list[dict[str, Any]]:
        with self._lock:
            matches = [
                dict(record)
                for record in self._table(table).values()
                if all(record.get(column) == value for column, value in filters.items())
            ]
            matches.sort(
                key=lambda r: (r["created_at"], self._sequence.get(r["id"], 0)),
                reverse=True,
            )
            return matches

    def update(
        self,
        table: str,
        record_id: str,
        data: dict[str, Any],
        *,
        owner_id: str | None = None,
    ) -> dict[str, Any] | None:
        with self._lock:
            record = self._table(table).get(record_id)
            if record is None:
                return None
            if owner_id is not None and record.get(OWNER_COLUMN) != owner_id:
                return None
            record.update(self._prepare_update(table, data))
            logger.debug(f"Updated {table}/{record_id}")
            return dict(record)

    def delete(self, table: str, record_id: str, *, owner_id: str | None = None) -> bool:
        with self._lock:
            rows = self._table(table)
            record = rows.get(record_id)
            if record is None:
                return False
            if owner_id is not None and record.get(OWNER_COLUMN) != owner_id:
                return False
            del rows[record_id]
            self._sequence.pop(record_id, None)
            logger.debug(f"Deleted {table}/{record_id}")
            return True

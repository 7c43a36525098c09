# =============================================================================
# lib/supabase_client.py - Supabase Record Store
# =============================================================================
# Production RecordStore backed by Supabase (PostgREST).
#
# Uses the service_role key, which bypasses Row Level Security. Ownership is
# therefore enforced by the services, and every owner-conditional write is
# expressed as a single statement filtered on both `id` and `user_id`.
#
# Expected tables:
#   projects(id uuid pk, user_id text, name text, created_at timestamptz, updated_at timestamptz)
#   images(id uuid pk, project_id uuid, user_id text, original_image_url text,
#          edited_image_url text, prompt text, created_at timestamptz)
#   with indexes on projects(user_id), images(project_id), images(user_id)
#
# Usage:
#   from lib.supabase_client import SupabaseRecordStore
#   store = SupabaseRecordStore(url, service_key)
#   store.select("projects", {"user_id": uid})
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from supabase import Client, create_client

from app.exceptions import RecordStoreError
from lib.record_store import OWNER_COLUMN, RecordStore

logger = logging.getLogger(__name__)


def _serialize(data: dict[str, Any]) -> dict[str, Any]:
    """Convert datetimes to ISO strings for the JSON wire format."""
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in data.items()
    }


class SupabaseRecordStore(RecordStore):
    """
    RecordStore implementation over a Supabase client.

    Example:
        store = SupabaseRecordStore(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        project = store.insert("projects", {"user_id": uid, "name": "Shoes"})
    """

    def __init__(self, url: str, service_key: str, client: Client | None = None):
        super().__init__()
        if client is None:
            try:
                client = create_client(url, service_key)
            except Exception as e:
                raise RecordStoreError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                )
            logger.info("Supabase client initialized successfully")
        self._client = client

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def fetch(self, table: str, record_id: str) -> dict[str, Any] | None:
        try:
            response = (
                self._client.table(table)
                .select("*")
                .eq("id", record_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise RecordStoreError(
                message=f"Failed to fetch {table} record: {e}",
                code="FETCH_FAILED",
                details={"table": table, "id": record_id},
            )
        rows = response.data or []
        return rows[0] if rows else None

    def select(self, table: str, filters: dict[str, str]) -> list[dict[str, Any]]:
        try:
            query = self._client.table(table).select("*")
            for column, value in filters.items():
                query = query.eq(column, value)
            response = query.order("created_at", desc=True).execute()
        except Exception as e:
            raise RecordStoreError(
                message=f"Failed to list {table}: {e}",
                code="SELECT_FAILED",
                details={"table": table, "filters": filters},
            )
        rows = response.data or []
        logger.debug(f"Selected {len(rows)} rows from {table}")
        return rows

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        record = _serialize(self._prepare_insert(table, data))
        try:
            response = self._client.table(table).insert(record).execute()
        except Exception as e:
            raise RecordStoreError(
                message=f"Failed to insert {table} record: {e}",
                code="INSERT_FAILED",
                details={"table": table},
            )
        if not response.data:
            raise RecordStoreError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table},
            )
        return response.data[0]

    def update(
        self,
        table: str,
        record_id: str,
        data: dict[str, Any],
        *,
        owner_id: str | None = None,
    ) -> dict[str, Any] | None:
        changes = _serialize(self._prepare_update(table, data))
        try:
            query = self._client.table(table).update(changes).eq("id", record_id)
            if owner_id is not None:
                query = query.eq(OWNER_COLUMN, owner_id)
            response = query.execute()
        except Exception as e:
            raise RecordStoreError(
                message=f"Failed to update {table} record: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": record_id},
            )
        rows = response.data or []
        return rows[0] if rows else None

    def delete(self, table: str, record_id: str, *, owner_id: str | None = None) -> bool:
        try:
            query = self._client.table(table).delete().eq("id", record_id)
            if owner_id is not None:
                query = query.eq(OWNER_COLUMN, owner_id)
            response = query.execute()
        except Exception as e:
            raise RecordStoreError(
                message=f"Failed to delete {table} record: {e}",
                code="DELETE_FAILED",
                details={"table": table, "id": record_id},
            )
        return bool(response.data)

    def ping(self) -> None:
        try:
            self._client.table("projects").select("id").limit(1).execute()
        except Exception as e:
            raise RecordStoreError(message=f"Supabase unreachable: {e}", code="PING_FAILED")

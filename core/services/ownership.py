# =============================================================================
# core/services/ownership.py - Ownership Predicate
# =============================================================================
# The single authorization rule of the system: a record is visible and
# mutable only by the user whose id is in its user_id column.
#
# ensure_owner() is applied before every read or mutation of a project or
# image. It distinguishes "does not exist" from "belongs to someone else";
# the API renders both the same way.
# =============================================================================

import logging
from typing import Any

from app.exceptions import RecordForbiddenError, RecordNotFoundError
from lib.record_store import OWNER_COLUMN

logger = logging.getLogger(__name__)


def is_owner(record: dict[str, Any], uid: str) -> bool:
    """True when `uid` owns `record`."""
    return record.get(OWNER_COLUMN) == uid


def ensure_owner(
    record: dict[str, Any] | None,
    uid: str,
    record_id: str,
    not_found: type[RecordNotFoundError],
    forbidden: type[RecordForbiddenError],
) -> dict[str, Any]:
    """
    Return the record if `uid` owns it.

    Raises:
        not_found: If the record does not exist
        forbidden: If it exists but belongs to another user
    """
    if record is None:
        raise not_found(record_id)
    if not is_owner(record, uid):
        logger.warning(f"User {uid} denied access to {forbidden.kind.lower()} {record_id}")
        raise forbidden(record_id)
    return record

# =============================================================================
# core/services/project_service.py - Project Business Logic
# =============================================================================
# Handles project CRUD scoped to the calling user.
# Separates HTTP concerns from record-store/business logic.
#
# Every method takes the caller's identity as its first argument and calls
# require_subject() before touching the store.
# =============================================================================

import logging

from app.auth.models import AuthUser
from app.exceptions import (
    CascadeIncompleteError,
    InputValidationError,
    ProjectForbiddenError,
    ProjectNotFoundError,
)
from core.identity import require_subject
from core.models.project import Project
from core.services.ownership import ensure_owner
from lib.record_store import RecordStore

logger = logging.getLogger(__name__)

PROJECTS = "projects"
IMAGES = "images"

# Re-list/delete passes before a cascade is declared incomplete
CASCADE_MAX_PASSES = 3


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InputValidationError("name", "Project name cannot be empty")
    return cleaned


class ProjectService:
    """
    Service for project management operations.

    Example:
        service = ProjectService(store)
        project = service.create_project(user, "Shoes")
        service.update_project(user, project.id, "Sneakers")
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def _owned_record(self, uid: str, project_id: str) -> dict:
        record = self.store.fetch(PROJECTS, project_id)
        return ensure_owner(record, uid, project_id, ProjectNotFoundError, ProjectForbiddenError)

    def create_project(self, user: AuthUser | None, name: str) -> Project:
        """
        Create a new project owned by the caller.

        Raises:
            UnauthenticatedError: If no identity is resolved
            InputValidationError: If the name is blank after trimming
        """
        uid = require_subject(user)
        record = self.store.insert(PROJECTS, {"user_id": uid, "name": _clean_name(name)})
        logger.info(f"Created project: {record['id']} for user: {uid}")
        return Project.model_validate(record)

    def list_projects(self, user: AuthUser | None) -> list[Project]:
        """List the caller's projects, newest first."""
        uid = require_subject(user)
        records = self.store.select(PROJECTS, {"user_id": uid})
        return [Project.model_validate(r) for r in records]

    def get_project(self, user: AuthUser | None, project_id: str) -> Project:
        """
        Get one of the caller's projects.

        Raises:
            ProjectNotFoundError: If the project doesn't exist
            ProjectForbiddenError: If another user owns it
        """
        uid = require_subject(user)
        return Project.model_validate(self._owned_record(uid, project_id))

    def update_project(self, user: AuthUser | None, project_id: str, name: str) -> Project:
        """
        Rename a project and bump its updated_at.

        The ownership check is repeated inside the write (conditional update
        on user_id), so a record that changes hands or disappears between the
        check and the write is reported as not found instead of modified.
        """
        uid = require_subject(user)
        self._owned_record(uid, project_id)
        cleaned = _clean_name(name)

        record = self.store.update(PROJECTS, project_id, {"name": cleaned}, owner_id=uid)
        if record is None:
            raise ProjectNotFoundError(project_id)

        logger.info(f"Renamed project: {project_id}")
        return Project.model_validate(record)

    def delete_project(self, user: AuthUser | None, project_id: str) -> None:
        """
        Delete a project and every image in it.

        All images are removed before the project row. If some images survive
        CASCADE_MAX_PASSES passes the project is kept and the call fails, so
        no image is ever left pointing at a deleted project.

        Raises:
            CascadeIncompleteError: If images could not all be deleted
        """
        uid = require_subject(user)
        self._owned_record(uid, project_id)

        remaining: list[dict] = []
        for _ in range(CASCADE_MAX_PASSES):
            remaining = self.store.select(IMAGES, {"project_id": project_id})
            if not remaining:
                break
            for image in remaining:
                self.store.delete(IMAGES, image["id"])
        else:
            remaining = self.store.select(IMAGES, {"project_id": project_id})

        if remaining:
            logger.error(f"Cascade for project {project_id} left {len(remaining)} images")
            raise CascadeIncompleteError(project_id, len(remaining))

        if not self.store.delete(PROJECTS, project_id, owner_id=uid):
            raise ProjectNotFoundError(project_id)

        # Images saved after the last pass but before the project row went away
        stragglers = self.store.select(IMAGES, {"project_id": project_id})
        for image in stragglers:
            self.store.delete(IMAGES, image["id"])
        if stragglers:
            logger.warning(f"Removed {len(stragglers)} late images of project {project_id}")

        logger.info(f"Deleted project: {project_id} and its images")

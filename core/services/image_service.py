# =============================================================================
# core/services/image_service.py - Image Business Logic
# =============================================================================
# Saves, lists and deletes edited image pairs.
#
# Ownership rules:
# - saving or listing into a project re-checks the project's owner
# - reading or deleting a single image checks the image's own owner
# - an image's user_id is always the caller, which (because the project
#   check passed) is always the project's owner
#
# A save re-reads the project after its insert and withdraws the image if
# the project was deleted in the meantime. Together with the sweep that
# delete_project runs after removing the project row, no image outlives
# its project.
# =============================================================================

import logging

from app.auth.models import AuthUser
from app.exceptions import (
    ImageForbiddenError,
    ImageNotFoundError,
    InputValidationError,
    ProjectForbiddenError,
    ProjectNotFoundError,
)
from core.identity import require_subject
from core.models.image import Image
from core.services.ownership import ensure_owner, is_owner
from core.services.project_service import IMAGES, PROJECTS
from lib.record_store import RecordStore

logger = logging.getLogger(__name__)


class ImageService:
    """
    Service for image pair operations.

    Example:
        service = ImageService(store)
        image = service.save_image(user, project_id, original, edited, "grey backdrop")
        service.get_project_images(user, project_id)
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def _check_project(self, uid: str, project_id: str) -> None:
        record = self.store.fetch(PROJECTS, project_id)
        ensure_owner(record, uid, project_id, ProjectNotFoundError, ProjectForbiddenError)

    def _owned_image(self, uid: str, image_id: str) -> dict:
        record = self.store.fetch(IMAGES, image_id)
        return ensure_owner(record, uid, image_id, ImageNotFoundError, ImageForbiddenError)

    def save_image(
        self,
        user: AuthUser | None,
        project_id: str,
        original_image_url: str,
        edited_image_url: str,
        prompt: str,
    ) -> Image:
        """
        Save an original/edited pair into one of the caller's projects.

        Ownership is checked before the payload, so a foreign project is
        refused whatever the payload looks like.

        Raises:
            ProjectNotFoundError / ProjectForbiddenError: As for get_project
            InputValidationError: If either image reference is empty
        """
        uid = require_subject(user)
        self._check_project(uid, project_id)

        if not (original_image_url or "").strip():
            raise InputValidationError("original_image_url", "Original image is required")
        if not (edited_image_url or "").strip():
            raise InputValidationError("edited_image_url", "Edited image is required")

        record = self.store.insert(IMAGES, {
            "project_id": project_id,
            "user_id": uid,
            "original_image_url": original_image_url,
            "edited_image_url": edited_image_url,
            "prompt": prompt or "",
        })

        # The project may have been deleted between the check and the insert
        project = self.store.fetch(PROJECTS, project_id)
        if project is None or not is_owner(project, uid):
            self.store.delete(IMAGES, record["id"])
            logger.warning(f"Project {project_id} vanished while saving image {record['id']}")
            raise ProjectNotFoundError(project_id)

        logger.info(f"Saved image: {record['id']} into project: {project_id}")
        return Image.model_validate(record)

    def get_project_images(self, user: AuthUser | None, project_id: str) -> list[Image]:
        """List a project's images, newest first."""
        uid = require_subject(user)
        self._check_project(uid, project_id)
        records = self.store.select(IMAGES, {"project_id": project_id})
        return [Image.model_validate(r) for r in records]

    def get_image(self, user: AuthUser | None, image_id: str) -> Image:
        """
        Get one of the caller's images.

        Raises:
            ImageNotFoundError: If the image doesn't exist
            ImageForbiddenError: If another user owns it
        """
        uid = require_subject(user)
        return Image.model_validate(self._owned_image(uid, image_id))

    def delete_image(self, user: AuthUser | None, image_id: str) -> None:
        """Delete one of the caller's images."""
        uid = require_subject(user)
        self._owned_image(uid, image_id)
        if not self.store.delete(IMAGES, image_id, owner_id=uid):
            raise ImageNotFoundError(image_id)
        logger.info(f"Deleted image: {image_id}")

    def list_all_images(self, user: AuthUser | None) -> list[Image]:
        """List every image the caller owns across all projects, newest first."""
        uid = require_subject(user)
        records = self.store.select(IMAGES, {"user_id": uid})
        return [Image.model_validate(r) for r in records]

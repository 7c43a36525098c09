# =============================================================================
# core/services/persistence_bridge.py - Edit Result Persistence
# =============================================================================
# Commits the output of a successful edit as an Image. All writes go
# through ImageService so the project's owner is checked again at write time.
# =============================================================================

import logging

from app.auth.models import AuthUser
from core.models.edit import StyleVariation
from core.models.image import Image
from core.services.image_service import ImageService

logger = logging.getLogger(__name__)


class EditPersistence:
    """Save edit and variation results into a project."""

    def __init__(self, images: ImageService):
        self.images = images

    def save_edit(
        self,
        user: AuthUser | None,
        project_id: str,
        original_image_url: str,
        edited_image_url: str,
        prompt: str,
    ) -> Image:
        image = self.images.save_image(
            user, project_id, original_image_url, edited_image_url, prompt
        )
        logger.debug(f"Persisted edit {image.id} for project {project_id}")
        return image

    def save_variation(
        self,
        user: AuthUser | None,
        project_id: str,
        original_image_url: str,
        variation: StyleVariation,
    ) -> Image:
        """Save one variation; its style becomes the stored prompt."""
        return self.save_edit(
            user, project_id, original_image_url, variation.image_data, variation.style
        )

# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .project_service import ProjectService
from .image_service import ImageService
from .persistence_bridge import EditPersistence

__all__ = [
    "ProjectService",
    "ImageService",
    "EditPersistence",
]

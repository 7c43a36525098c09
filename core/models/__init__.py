# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - project.py: Project CRUD schemas
# - image.py: Saved image (original/edited pair) schemas
# - edit.py: Background edit, suggestion and variation payloads
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Project Models - Ownership containers
# -----------------------------------------------------------------------------
from .project import (
    Project,
    ProjectCreate,
    ProjectUpdate,
)

# -----------------------------------------------------------------------------
# Image Models - Saved edit results
# -----------------------------------------------------------------------------
from .image import (
    Image,
    ImageCreate,
)

# -----------------------------------------------------------------------------
# Edit Models - Gemini-backed operations
# -----------------------------------------------------------------------------
from .edit import (
    AnalyzeImageRequest,
    AnalyzeImageResponse,
    BatchPolicy,
    EditBackgroundRequest,
    EditBackgroundResponse,
    GenerateVariationsRequest,
    GenerateVariationsResponse,
    ImagePayload,
    SaveVariationRequest,
    StyleVariation,
    StyleVariationFailure,
)

__all__ = [
    # Project
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    # Image
    "Image",
    "ImageCreate",
    # Edit
    "AnalyzeImageRequest",
    "AnalyzeImageResponse",
    "BatchPolicy",
    "EditBackgroundRequest",
    "EditBackgroundResponse",
    "GenerateVariationsRequest",
    "GenerateVariationsResponse",
    "ImagePayload",
    "SaveVariationRequest",
    "StyleVariation",
    "StyleVariationFailure",
]

# =============================================================================
# core/models/edit.py - Background Edit Schemas
# =============================================================================
# Request/response contract for the model-backed operations:
# - EditBackgroundRequest / EditBackgroundResponse: one background edit
# - AnalyzeImageRequest / AnalyzeImageResponse: background suggestions
# - GenerateVariationsRequest / GenerateVariationsResponse: one edit per style
#
# Images travel as base64 text (a data URI prefix is accepted and stripped).
# Edited images always come back as data:image/png;base64,... URIs.
# =============================================================================

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

# Upload formats accepted by the editor
ImageMimeType = Literal["image/png", "image/jpeg", "image/webp"]


class BatchPolicy(str, Enum):
    """
    How a variation batch reports failures.

    - fail_fast: any failed style fails the whole batch, no partial results
    - collect: every style runs; successes and failures are both reported
    """
    FAIL_FAST = "fail_fast"
    COLLECT = "collect"


class ImagePayload(BaseModel):
    """Base64-encoded source image with its content type."""

    image_base64: str = Field(
        ...,
        description="Base64 image bytes, optionally as a data URI"
    )
    mime_type: ImageMimeType = Field(
        ...,
        description="Content type of the source image"
    )


class EditBackgroundRequest(ImagePayload):
    """
    Schema for a single background edit.

    When project_id is given, the original/edited pair is saved into that
    project after a successful edit.

    Example:
        {
            "image_base64": "data:image/jpeg;base64,/9j/4AAQ...",
            "mime_type": "image/jpeg",
            "prompt": "a solid light grey background",
            "project_id": "550e8400-e29b-41d4-a716-446655440000"
        }
    """
    prompt: str = Field(..., description="How the background should change")
    project_id: str | None = Field(
        default=None,
        description="Save the result into this project"
    )


class EditBackgroundResponse(BaseModel):
    """Result of a background edit."""
    success: bool = True
    image_data: str = Field(..., description="Edited image as a PNG data URI")
    image_id: str | None = Field(
        default=None,
        description="Id of the saved image, when the edit was saved"
    )


class AnalyzeImageRequest(ImagePayload):
    """Schema for asking the model for background ideas."""


class AnalyzeImageResponse(BaseModel):
    """Suggested background styles for a product image."""
    success: bool = True
    suggestions: list[str] = Field(default_factory=list)


class GenerateVariationsRequest(ImagePayload):
    """
    Schema for generating one edit per background style.

    Example:
        {
            "image_base64": "iVBORw0KG...",
            "mime_type": "image/png",
            "background_styles": ["modern studio", "outdoor nature setting"]
        }
    """
    background_styles: list[str] = Field(
        ...,
        description="Background styles, one edit each"
    )


class StyleVariation(BaseModel):
    """One successfully edited style."""
    style: str
    image_data: str = Field(..., description="Edited image as a PNG data URI")


class StyleVariationFailure(BaseModel):
    """One failed style (collect policy only)."""
    style: str
    code: str
    message: str


class GenerateVariationsResponse(BaseModel):
    """Variation batch result, in the order of the requested styles."""
    success: bool = True
    variations: list[StyleVariation] = Field(default_factory=list)
    failures: list[StyleVariationFailure] = Field(default_factory=list)


class SaveVariationRequest(BaseModel):
    """Schema for keeping one variation from a batch."""
    original_image_url: str
    variation: StyleVariation

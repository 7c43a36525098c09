# =============================================================================
# core/models/image.py - Image Schemas
# =============================================================================
# An Image is one original/edited pair saved under a project.
#
# The *_image_url fields are opaque references. In practice they are data
# URIs; nothing in the core decodes them. Images are immutable once saved,
# they can only be deleted (individually or with their project).
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ImageCreate(BaseModel):
    """
    Schema for saving an edited image pair into a project.

    The owner is never accepted from the client; it is always the caller.

    Example:
        {
            "original_image_url": "data:image/jpeg;base64,/9j/4AAQ...",
            "edited_image_url": "data:image/png;base64,iVBORw0KG...",
            "prompt": "a solid light grey background"
        }
    """
    original_image_url: str = Field(..., description="Reference to the source image")
    edited_image_url: str = Field(..., description="Reference to the edited image")
    prompt: str = Field(default="", description="Instruction that produced the edit")


class Image(BaseModel):
    """
    Schema for returning a saved image pair to clients.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Unique image identifier")

    project_id: str = Field(..., description="Project the image belongs to")

    # Always equal to the owning project's user_id (checked at write time)
    user_id: str = Field(..., description="Owner's subject id")

    original_image_url: str
    edited_image_url: str
    prompt: str

    created_at: datetime = Field(..., description="Set by the store on insert")

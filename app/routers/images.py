# =============================================================================
# app/routers/images.py - Image Endpoints
# =============================================================================
# Access to saved images across all of the caller's projects.
# Saving happens under /projects/{id}/images (see projects.py).
# =============================================================================

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_identity
from app.dependencies import ImageServiceDep
from core.models.image import Image

router = APIRouter()

Identity = Annotated[Optional[AuthUser], Depends(get_identity)]
ImageId = Annotated[str, Path(description="Image id")]


@router.get("", response_model=list[Image])
async def list_all_images(user: Identity, images: ImageServiceDep):
    """
    List every image the caller owns, newest first.
    """
    return images.list_all_images(user)


@router.get("/{image_id}", response_model=Image)
async def get_image(image_id: ImageId, user: Identity, images: ImageServiceDep):
    """
    Get a single image. User must own the image.
    """
    return images.get_image(user, image_id)


@router.delete("/{image_id}")
async def delete_image(image_id: ImageId, user: Identity, images: ImageServiceDep):
    """
    Delete a single image. User must own the image.
    """
    images.delete_image(user, image_id)
    return {"success": True, "image_id": image_id}

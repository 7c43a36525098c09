# =============================================================================
# app/routers/edits.py - Background Edit Endpoints
# =============================================================================
# Model-backed operations:
# - POST /edits/background: one background edit (optionally saved)
# - POST /edits/suggestions: background ideas for an image
# - POST /edits/variations: one edit per background style
#
# The identity gate runs before the payload is even decoded.
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from app.auth import AuthUser, get_identity
from app.dependencies import (
    BackgroundEditorDep,
    EditPersistenceDep,
    ImageAnalystDep,
    ProjectServiceDep,
    VariationGeneratorDep,
)
from core.identity import require_subject
from core.models.edit import (
    AnalyzeImageRequest,
    AnalyzeImageResponse,
    EditBackgroundRequest,
    EditBackgroundResponse,
    GenerateVariationsRequest,
    GenerateVariationsResponse,
)
from lib.utils import decode_image_base64, to_data_uri

logger = logging.getLogger(__name__)

router = APIRouter()

Identity = Annotated[Optional[AuthUser], Depends(get_identity)]


@router.post("/background", response_model=EditBackgroundResponse)
async def edit_image_background(
    request: EditBackgroundRequest,
    user: Identity,
    editor: BackgroundEditorDep,
    projects: ProjectServiceDep,
    persistence: EditPersistenceDep,
):
    """
    Replace the background of a product image.

    When project_id is set, project ownership is checked before the model is
    called and the original/edited pair is saved after a successful edit.
    """
    require_subject(user)
    if request.project_id:
        projects.get_project(user, request.project_id)

    image_bytes = decode_image_base64(request.image_base64)
    edited = await editor.edit_background(user, image_bytes, request.mime_type, request.prompt)

    image_id = None
    if request.project_id:
        saved = persistence.save_edit(
            user,
            request.project_id,
            to_data_uri(image_bytes, request.mime_type),
            edited,
            request.prompt.strip(),
        )
        image_id = saved.id

    return EditBackgroundResponse(image_data=edited, image_id=image_id)


@router.post("/suggestions", response_model=AnalyzeImageResponse)
async def analyze_image_for_background_prompt(
    request: AnalyzeImageRequest,
    user: Identity,
    analyst: ImageAnalystDep,
):
    """
    Suggest background styles that would showcase the product.
    """
    require_subject(user)
    image_bytes = decode_image_base64(request.image_base64)
    suggestions = await analyst.suggest_backgrounds(user, image_bytes, request.mime_type)
    return AnalyzeImageResponse(suggestions=suggestions)


@router.post("/variations", response_model=GenerateVariationsResponse)
async def generate_background_variations(
    request: GenerateVariationsRequest,
    user: Identity,
    generator: VariationGeneratorDep,
):
    """
    Generate one edited image per background style.

    By default the whole batch fails if any style fails. With
    VARIATION_BATCH_POLICY=collect the response lists per-style failures.
    """
    require_subject(user)
    image_bytes = decode_image_base64(request.image_base64)
    return await generator.generate_variations(
        user, image_bytes, request.mime_type, request.background_styles
    )

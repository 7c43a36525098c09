# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The record store and the Gemini client are built once per process (cached)
# and warmed in the application lifespan. Services and orchestrators are
# cheap wrappers built per request around those two.
#
# Tests replace get_record_store / get_gemini_client through
# app.dependency_overrides.
# =============================================================================

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from agents.background_editor import BackgroundEditor
from agents.image_analyst import ImageAnalyst
from agents.variation_batch import VariationGenerator
from core.models.edit import BatchPolicy
from core.services.image_service import ImageService
from core.services.persistence_bridge import EditPersistence
from core.services.project_service import ProjectService
from lib.gemini_client import GeminiClient
from lib.record_store import InMemoryRecordStore, RecordStore

logger = logging.getLogger(__name__)


@lru_cache
def get_record_store() -> RecordStore:
    """
    Get the process-wide record store.

    Returns the backend selected by RECORD_STORE_BACKEND.
    """
    if settings.RECORD_STORE_BACKEND == "memory":
        logger.info("Using in-memory record store")
        return InMemoryRecordStore()

    from lib.supabase_client import SupabaseRecordStore

    return SupabaseRecordStore(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)


@lru_cache
def get_gemini_client() -> GeminiClient:
    """Get the process-wide Gemini client."""
    return GeminiClient(
        api_key=settings.GEMINI_API_KEY,
        image_model=settings.GEMINI_IMAGE_MODEL,
        text_model=settings.GEMINI_TEXT_MODEL,
    )


StoreDep = Annotated[RecordStore, Depends(get_record_store)]
GeminiDep = Annotated[GeminiClient, Depends(get_gemini_client)]


def get_project_service(store: StoreDep) -> ProjectService:
    return ProjectService(store)


def get_image_service(store: StoreDep) -> ImageService:
    return ImageService(store)


def get_edit_persistence(images: Annotated[ImageService, Depends(get_image_service)]) -> EditPersistence:
    return EditPersistence(images)


def get_background_editor(client: GeminiDep) -> BackgroundEditor:
    return BackgroundEditor(client)


def get_variation_generator(
    editor: Annotated[BackgroundEditor, Depends(get_background_editor)],
) -> VariationGenerator:
    return VariationGenerator(
        editor,
        max_concurrency=settings.VARIATION_MAX_CONCURRENCY,
        policy=BatchPolicy(settings.VARIATION_BATCH_POLICY),
    )


def get_image_analyst(client: GeminiDep) -> ImageAnalyst:
    return ImageAnalyst(client)


# Type aliases for dependency injection
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ImageServiceDep = Annotated[ImageService, Depends(get_image_service)]
EditPersistenceDep = Annotated[EditPersistence, Depends(get_edit_persistence)]
BackgroundEditorDep = Annotated[BackgroundEditor, Depends(get_background_editor)]
VariationGeneratorDep = Annotated[VariationGenerator, Depends(get_variation_generator)]
ImageAnalystDep = Annotated[ImageAnalyst, Depends(get_image_analyst)]

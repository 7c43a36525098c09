# =============================================================================
# app/routers/projects.py - Project CRUD Endpoints
# =============================================================================
# Handles project creation and management, plus the images saved inside a
# project. Every endpoint passes the caller's identity to the service, which
# rejects anonymous calls and enforces ownership.
# =============================================================================

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, get_identity
from app.dependencies import EditPersistenceDep, ImageServiceDep, ProjectServiceDep
from core.models.edit import SaveVariationRequest
from core.models.image import Image, ImageCreate
from core.models.project import Project, ProjectCreate, ProjectUpdate

router = APIRouter()

Identity = Annotated[Optional[AuthUser], Depends(get_identity)]
ProjectId = Annotated[str, Path(description="Project id")]


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    request: ProjectCreate,
    user: Identity,
    projects: ProjectServiceDep,
):
    """
    Create a new project.

    The name is trimmed; a blank name is rejected.
    """
    return projects.create_project(user, request.name)


@router.get("", response_model=list[Project])
async def list_projects(user: Identity, projects: ProjectServiceDep):
    """
    List the caller's projects, newest first.
    """
    return projects.list_projects(user)


@router.get("/{project_id}", response_model=Project)
async def get_project(project_id: ProjectId, user: Identity, projects: ProjectServiceDep):
    """
    Get project details. User must own the project.
    """
    return projects.get_project(user, project_id)


@router.patch("/{project_id}", response_model=Project)
async def update_project(
    project_id: ProjectId,
    request: ProjectUpdate,
    user: Identity,
    projects: ProjectServiceDep,
):
    """
    Rename a project. User must own the project.
    """
    return projects.update_project(user, project_id, request.name)


@router.delete("/{project_id}")
async def delete_project(project_id: ProjectId, user: Identity, projects: ProjectServiceDep):
    """
    Delete a project and all of its images.
    """
    projects.delete_project(user, project_id)
    return {"success": True, "project_id": project_id}


# =============================================================================
# Images inside a project
# =============================================================================

@router.post("/{project_id}/images", response_model=Image, status_code=status.HTTP_201_CREATED)
async def save_image(
    project_id: ProjectId,
    request: ImageCreate,
    user: Identity,
    images: ImageServiceDep,
):
    """
    Save an original/edited image pair into a project.
    """
    return images.save_image(
        user,
        project_id,
        request.original_image_url,
        request.edited_image_url,
        request.prompt,
    )


@router.get("/{project_id}/images", response_model=list[Image])
async def get_project_images(project_id: ProjectId, user: Identity, images: ImageServiceDep):
    """
    List a project's images, newest first.
    """
    return images.get_project_images(user, project_id)


@router.post("/{project_id}/variations", response_model=Image, status_code=status.HTTP_201_CREATED)
async def save_variation(
    project_id: ProjectId,
    request: SaveVariationRequest,
    user: Identity,
    persistence: EditPersistenceDep,
):
    """
    Keep one variation from a batch; its style is stored as the prompt.
    """
    return persistence.save_variation(
        user, project_id, request.original_image_url, request.variation
    )

# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# These models define the API contract for project operations:
# - ProjectCreate: Input for creating a project
# - ProjectUpdate: Input for renaming a project
# - Project: A stored project as returned to clients
#
# A project groups the product images one user has edited. It is owned by
# exactly one user (user_id) and only that user can see or change it.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProjectCreate(BaseModel):
    """
    Schema for creating a new project.

    Blank names are rejected by the service (after trimming), not here,
    so that the error carries the VALIDATION_ERROR code.

    Example:
        {"name": "Summer shoe catalogue"}
    """
    name: str = Field(
        ...,
        max_length=255,
        description="Human-readable project name"
    )


class ProjectUpdate(BaseModel):
    """
    Schema for renaming a project. The name is the only mutable field.

    Example:
        {"name": "Autumn shoe catalogue"}
    """
    name: str = Field(
        ...,
        max_length=255,
        description="New project name"
    )


class Project(BaseModel):
    """
    Schema for returning project data to clients.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "user_id": "user_2abc",
            "name": "Shoes",
            "created_at": "2024-01-15T10:30:00Z",
            "updated_at": "2024-01-15T10:30:00Z"
        }
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Unique project identifier")

    # Owner of the project; the sole basis for access control
    user_id: str = Field(..., description="Owner's subject id")

    name: str = Field(..., description="Project name")

    created_at: datetime = Field(..., description="Set by the store on insert")

    updated_at: datetime = Field(..., description="Set by the store on every write")

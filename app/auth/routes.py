# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual signup/login is handled by Supabase Auth client-side.
# These routes only echo the identity resolved from the token.
# =============================================================================

from typing import Optional

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_identity
from app.auth.models import AuthUser, UserResponse
from core.identity import require_subject

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: Optional[AuthUser] = Depends(get_identity)
) -> UserResponse:
    """
    Get the current authenticated user.

    Raises:
        401: If not authenticated
    """
    subject = require_subject(user)
    return UserResponse(id=subject, email=user.email)


@router.get("/verify")
async def verify_token(
    user: Optional[AuthUser] = Depends(get_identity)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    subject = require_subject(user)
    return {
        "valid": True,
        "user_id": subject,
        "email": user.email,
    }

# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based identity resolution using Supabase Auth tokens.
#
# Usage:
#   from app.auth import get_identity, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser | None = Depends(get_identity)):
#       subject = require_subject(user)
# =============================================================================

from app.auth.dependencies import decode_access_token, get_identity
from app.auth.models import AuthUser, UserResponse

__all__ = [
    "decode_access_token",
    "get_identity",
    "AuthUser",
    "UserResponse",
]

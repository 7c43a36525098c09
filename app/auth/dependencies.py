# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Resolves the identity context of a request from its bearer token.
#
# Supports both:
# - ES256/RS256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret)
#
# A request without a token resolves to None. The services decide what an
# absent identity means (they all reject it); an invalid token is rejected
# here, immediately.
#
# Usage:
#   from app.auth import get_identity, AuthUser
#
#   @router.get("/things")
#   async def list_things(user: AuthUser | None = Depends(get_identity)):
#       return service.list_things(user)
# =============================================================================

import logging
import time
from typing import Any, Optional

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import AuthUser, TokenPayload
from app.config import settings
from app.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

# Bearer token extractor; a missing header is not an error at this layer
security_optional = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url() -> str:
    """Get the JWKS URL from the Supabase project URL."""
    supabase_url = (settings.SUPABASE_URL or "").rstrip("/")
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()
    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        response = httpx.get(_get_jwks_url(), timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug("Fetched JWKS signing keys")
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Serve the stale cache rather than locking everyone out
        if not _jwks_cache:
            return {"keys": []}
    return _jwks_cache


def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Get the verification key and algorithm for a token.

    Raises:
        UnauthenticatedError: If no usable key is configured or published
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        raise UnauthenticatedError("Invalid token: unreadable header")

    alg = header.get("alg", "HS256")
    kid = header.get("kid")

    if alg == "HS256":
        if not settings.SUPABASE_JWT_SECRET:
            logger.error("HS256 token received but SUPABASE_JWT_SECRET is not set")
            raise UnauthenticatedError("Token verification is not configured")
        return settings.SUPABASE_JWT_SECRET, alg

    for key in _fetch_jwks().get("keys", []):
        if key.get("kid") == kid:
            return key, alg

    logger.warning(f"No signing key found for alg={alg}, kid={kid}")
    raise UnauthenticatedError("Invalid token: unknown signing key")


def decode_access_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and return the user it names.

    Raises:
        UnauthenticatedError: If the token is invalid, expired or has no subject
    """
    signing_key, algorithm = _get_signing_key(token)

    try:
        claims = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=settings.JWT_AUDIENCE,
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise UnauthenticatedError("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise UnauthenticatedError(f"Invalid token: {e}")

    if not claims.get("sub"):
        logger.warning("JWT token missing 'sub' claim")
        raise UnauthenticatedError("Invalid token: missing user ID")

    payload = TokenPayload(**claims)
    logger.debug(f"Authenticated user: {payload.sub}")
    return AuthUser(id=payload.sub, email=payload.email)


async def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional)
) -> Optional[AuthUser]:
    """
    Resolve the identity context of the current request.

    Returns:
        AuthUser for a valid token, None when no token was sent

    Raises:
        UnauthenticatedError: If a token was sent but does not verify
    """
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)

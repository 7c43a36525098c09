# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where possible, a
# suggestion telling the caller HOW to fix it, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class BackdropException(Exception):
    """
    Base exception for the background studio API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "BACKDROP_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Identity Exceptions
# =============================================================================

class UnauthenticatedError(BackdropException):
    """Raised when an operation is called without a resolved identity."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message=message,
            code="UNAUTHENTICATED",
            status_code=401,
            suggestion="Sign in and send the access token as 'Authorization: Bearer <token>'",
        )


# =============================================================================
# Validation Exceptions
# =============================================================================

class InputValidationError(BackdropException):
    """Raised when a required value is empty or malformed."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"field": field},
        )


# =============================================================================
# Record Access Exceptions
# =============================================================================
# NotFound and Forbidden stay distinct internally (different classes and
# codes, visible in logs) but render the same body so that a caller cannot
# probe which record ids exist.

class RecordAccessError(BackdropException):
    """Base for record lookups the caller may not see."""

    kind = "Record"

    def __init__(self, record_id: str, code: str, message: str):
        super().__init__(
            message=message,
            code=code,
            status_code=404,
            details={"id": record_id},
        )
        self.record_id = record_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "detail": f"{self.kind} not found",
            "code": "NOT_FOUND",
            "suggestion": f"Check that the {self.kind.lower()} id is correct and belongs to you",
        }


class RecordNotFoundError(RecordAccessError):
    """Raised when no record with the given id exists."""

    def __init__(self, record_id: str):
        super().__init__(
            record_id,
            code=f"{self.kind.upper()}_NOT_FOUND",
            message=f"{self.kind} not found: {record_id}",
        )


class RecordForbiddenError(RecordAccessError):
    """Raised when the record exists but belongs to another user."""

    def __init__(self, record_id: str):
        super().__init__(
            record_id,
            code=f"{self.kind.upper()}_FORBIDDEN",
            message=f"{self.kind} {record_id} is owned by another user",
        )


class ProjectNotFoundError(RecordNotFoundError):
    kind = "Project"


class ProjectForbiddenError(RecordForbiddenError):
    kind = "Project"


class ImageNotFoundError(RecordNotFoundError):
    kind = "Image"


class ImageForbiddenError(RecordForbiddenError):
    kind = "Image"


# =============================================================================
# Store Exceptions
# =============================================================================

class RecordStoreError(BackdropException):
    """Raised when the record store itself fails."""

    def __init__(
        self,
        message: str,
        code: str = "RECORD_STORE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details=details,
        )


class CascadeIncompleteError(RecordStoreError):
    """Raised when a project's images could not all be deleted."""

    def __init__(self, project_id: str, remaining: int):
        super().__init__(
            message=f"Could not delete all images of project {project_id} ({remaining} remaining)",
            code="CASCADE_INCOMPLETE",
            details={"project_id": project_id, "remaining": remaining},
        )


# =============================================================================
# Upstream Model Exceptions
# =============================================================================

class UpstreamConfigError(BackdropException):
    """Raised when the Gemini API key is not configured."""

    def __init__(self):
        super().__init__(
            message="GEMINI_API_KEY environment variable is not configured",
            code="UPSTREAM_CONFIG_ERROR",
            status_code=503,
            suggestion="Set GEMINI_API_KEY in the environment or .env file and restart",
        )


class UpstreamModelError(BackdropException):
    """Raised when the Gemini call fails at the transport or model level."""

    def __init__(self, message: str, upstream_message: str | None = None):
        super().__init__(
            message=message,
            code="UPSTREAM_MODEL_ERROR",
            status_code=502,
            suggestion="Try again, or use a different prompt or image",
            details={"upstream_message": upstream_message} if upstream_message else None,
        )
        self.upstream_message = upstream_message


class NoImageReturnedError(BackdropException):
    """Raised when the model answered without inline image data."""

    def __init__(self, style: str | None = None):
        if style:
            message = f"Failed to generate variation for style: {style}"
        else:
            message = "Could not find image data in the Gemini API response"
        super().__init__(
            message=message,
            code="NO_IMAGE_RETURNED",
            status_code=502,
            suggestion="The model did not return an image. Please try a different prompt",
            details={"style": style} if style else None,
        )
        self.style = style


# =============================================================================
# Exception Handlers
# =============================================================================

async def backdrop_exception_handler(
    request: Request,
    exc: BackdropException
) -> JSONResponse:
    """
    Convert BackdropException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )

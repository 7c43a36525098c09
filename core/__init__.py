# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - identity.py: The "who is calling" gate used by every operation
# - models/: Pydantic schemas for projects, images and edit payloads
# - services/: Ownership-scoped project and image persistence
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================

# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - projects.py: Project CRUD and the images saved inside a project
# - images.py: Image access across all of the caller's projects
# - edits.py: Gemini-backed background edits, suggestions and variations
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import projects
from . import images
from . import edits

__all__ = [
    "health",
    "projects",
    "images",
    "edits",
]

# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Backdrop API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.dependencies import get_gemini_client, get_record_store
from app.exceptions import (
    BackdropException,
    backdrop_exception_handler,
    validation_exception_handler,
)
from app.routers import health, projects, images, edits
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Build the record store and the Gemini client once
    - Shutdown: Log only; both clients hold no resources needing cleanup
    """
    logger.info(f"Starting Backdrop API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    store = get_record_store()
    logger.info(f"Record store ready: {type(store).__name__}")

    gemini = get_gemini_client()
    if not gemini.configured:
        logger.warning("GEMINI_API_KEY is not set; edit endpoints will return 503")

    yield

    logger.info("Shutting down Backdrop API")


# Create FastAPI application
app = FastAPI(
    title="Backdrop API",
    description="""
## Product Photo Background Replacement

Backdrop swaps the background of product photos using Gemini image models
and keeps the results in per-user projects.

### How It Works

1. **Create a Project** - Group related product shots
2. **Edit a Background** - Send an image and describe the new background
3. **Try Variations** - Generate one edit per background style
4. **Save Results** - Keep the original/edited pairs you like

### Quick Start

```bash
# 1. Create project
curl -X POST http://localhost:8000/api/v1/projects \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Spring catalog"}'

# 2. Edit and save
curl -X POST http://localhost:8000/api/v1/edits/background \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"image_base64": "...", "mime_type": "image/png",
       "prompt": "marble countertop", "project_id": "{id}"}'
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Authentication endpoints for verifying JWT tokens",
        },
        {
            "name": "Projects",
            "description": "Create and manage projects and their saved images",
        },
        {
            "name": "Images",
            "description": "Access saved images across projects",
        },
        {
            "name": "Edits",
            "description": "Background edits, suggestions and style variations",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(BackdropException)
async def handle_backdrop_exception(request: Request, exc: BackdropException):
    """Handle custom Backdrop exceptions."""
    return await backdrop_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Project endpoints
app.include_router(
    projects.router,
    prefix="/api/v1/projects",
    tags=["Projects"]
)

# Image endpoints
app.include_router(
    images.router,
    prefix="/api/v1/images",
    tags=["Images"]
)

# Gemini edit endpoints
app.include_router(
    edits.router,
    prefix="/api/v1/edits",
    tags=["Edits"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Backdrop API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }


def run() -> None:
    """Serve the API with uvicorn using API_HOST / API_PORT (auto-reload in development)."""
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()

# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - In-memory record store and two users (alice, bob)
# - A Gemini client whose SDK is mocked, answering with real
#   google-genai response objects
# =============================================================================

import os
import time

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ["RECORD_STORE_BACKEND"] = "memory"
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.pop("GEMINI_API_KEY", None)

from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types
from jose import jwt

from app.auth.models import AuthUser
from core.services.image_service import ImageService
from core.services.project_service import ProjectService
from lib.gemini_client import GeminiClient
from lib.record_store import InMemoryRecordStore

TEST_JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]

# Stand-ins for real image bytes; nothing in the pipeline decodes them
PRODUCT_BYTES = b"\x89PNG\r\n\x1a\nproduct-photo"
EDITED_BYTES = b"\x89PNG\r\n\x1a\nedited-photo"


# =============================================================================
# Helpers
# =============================================================================

def image_response(data: bytes | None = EDITED_BYTES) -> types.GenerateContentResponse:
    """A model answer whose first part is an inline image (or only text when data is None)."""
    if data is None:
        parts = [types.Part(text="I can't edit this image.")]
    else:
        parts = [types.Part(inline_data=types.Blob(data=data, mime_type="image/png"))]
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=parts))]
    )


def text_response(text: str) -> types.GenerateContentResponse:
    """A model answer made of one text part."""
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))]
    )


def sent_instruction(call) -> str:
    """The instruction text of one recorded generate_content call."""
    return call.kwargs["contents"][0].parts[1].text


def make_token(sub: str, email: str | None = None, expires_in: int = 3600, **claims) -> str:
    """Sign a Supabase-style HS256 access token."""
    now = int(time.time())
    payload = {
        "sub": sub,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "iat": now,
        "exp": now + expires_in,
    }
    payload.update(claims)
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """A fresh in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def alice():
    return AuthUser(id="user-alice", email="alice@example.com")


@pytest.fixture
def bob():
    return AuthUser(id="user-bob", email="bob@example.com")


@pytest.fixture
def projects(store):
    return ProjectService(store)


@pytest.fixture
def images(store):
    return ImageService(store)


@pytest.fixture
def sdk():
    """
    Mocked google-genai client.

    By default every call answers with an edited image. Tests replace
    `sdk.aio.models.generate_content.side_effect` to script other answers.
    """
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=image_response())
    return client


@pytest.fixture
def gemini(sdk):
    return GeminiClient(api_key=None, client=sdk)


@pytest.fixture
def unconfigured_gemini():
    """A Gemini client built without an API key."""
    return GeminiClient(api_key=None)

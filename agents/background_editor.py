# =============================================================================
# agents/background_editor.py - Single Background Edit
# =============================================================================
# Sends one product image + instruction to the image model and turns the
# answer into a PNG data URI.
#
# Flow:
# 1. Require an identity (UnauthenticatedError)
# 2. Validate the prompt (InputValidationError)
# 3. Build the two-part request
# 4. Call the model (UpstreamConfigError / UpstreamModelError)
# 5. Take the inline image of the first part of the first candidate
#    (NoImageReturnedError when it is missing)
#
# No retries: an upstream failure goes straight back to the caller.
#
# Usage:
#   editor = BackgroundEditor(gemini_client)
#   data_uri = await editor.edit_background(user, image_bytes, "image/jpeg", "grey backdrop")
# =============================================================================

from __future__ import annotations

import logging

from google.genai import types

from app.auth.models import AuthUser
from app.exceptions import InputValidationError, NoImageReturnedError
from core.identity import require_subject
from agents.request_builder import EditRequest, build_edit_request
from lib.gemini_client import GeminiClient
from lib.utils import to_data_uri

logger = logging.getLogger(__name__)


def extract_inline_image(
    response: types.GenerateContentResponse,
    style: str | None = None,
) -> bytes:
    """
    Return the image bytes of the first part of the first candidate.

    Raises:
        NoImageReturnedError: If that part is missing or carries no inline data
    """
    candidates = response.candidates or []
    content = candidates[0].content if candidates else None
    parts = (content.parts if content else None) or []
    inline = parts[0].inline_data if parts else None

    if inline is None or not inline.data:
        raise NoImageReturnedError(style)
    return inline.data


class BackgroundEditor:
    """
    Background replacement for one product image.

    Attributes:
        client: Injected Gemini client
    """

    def __init__(self, client: GeminiClient):
        self.client = client

    async def edit_background(
        self,
        user: AuthUser | None,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
    ) -> str:
        """
        Replace the background of a product image.

        Args:
            user: Caller identity
            image_bytes: Raw source image
            mime_type: Source content type
            prompt: Description of the new background

        Returns:
            The edited image as a `data:image/png;base64,...` URI
        """
        uid = require_subject(user)
        if not (prompt or "").strip():
            raise InputValidationError("prompt", "Please provide a prompt describing the new background")

        logger.info(f"User {uid} requested a background edit")
        request = build_edit_request(image_bytes, mime_type, prompt.strip())
        return await self.run(request, action="edit image background")

    async def run(
        self,
        request: EditRequest,
        *,
        style: str | None = None,
        action: str = "edit image background",
    ) -> str:
        """
        Send a prepared request and return the edited image as a PNG data URI.

        The model's output bytes are labelled image/png whatever the input type was.
        """
        response = await self.client.generate_image(request.parts, action=action)
        image_bytes = extract_inline_image(response, style=style)
        return to_data_uri(image_bytes)

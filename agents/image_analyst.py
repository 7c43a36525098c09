# =============================================================================
# agents/image_analyst.py - Background Suggestions
# =============================================================================
# Asks the text model which backgrounds would suit a product image and
# parses its comma-separated answer. An empty answer is not an error: the
# fixed default list is returned instead.
# =============================================================================

from __future__ import annotations

import logging

from app.auth.models import AuthUser
from core.identity import require_subject
from agents.prompts.background_prompts import (
    BACKGROUND_SUGGESTION_PROMPT,
    DEFAULT_BACKGROUND_SUGGESTIONS,
)
from agents.request_builder import build_request
from lib.gemini_client import GeminiClient

logger = logging.getLogger(__name__)


def parse_suggestions(text: str) -> list[str]:
    """
    Split a comma-separated answer into trimmed suggestions.

    Example:
        parse_suggestions(" studio,  beach ,")  # ["studio", "beach"]
        parse_suggestions("")  # ["modern studio", "outdoor setting", "gradient background"]
    """
    suggestions = [item.strip() for item in (text or "").split(",")]
    suggestions = [item for item in suggestions if item]
    return suggestions or list(DEFAULT_BACKGROUND_SUGGESTIONS)


class ImageAnalyst:
    """Suggests background styles for a product image."""

    def __init__(self, client: GeminiClient):
        self.client = client

    async def suggest_backgrounds(
        self,
        user: AuthUser | None,
        image_bytes: bytes,
        mime_type: str,
    ) -> list[str]:
        """
        Return 3-5 short background suggestions (or the defaults).

        Raises:
            UnauthenticatedError: If no identity is resolved
            UpstreamConfigError / UpstreamModelError: If the model call fails
        """
        uid = require_subject(user)
        request = build_request(image_bytes, mime_type, BACKGROUND_SUGGESTION_PROMPT)
        text = await self.client.generate_text(request.parts, action="analyze image")

        suggestions = parse_suggestions(text)
        logger.info(f"Suggested {len(suggestions)} backgrounds for user {uid}")
        return suggestions

# =============================================================================
# lib/gemini_client.py - Gemini Client Wrapper
# =============================================================================
# Thin async wrapper over the google-genai SDK.
#
# One instance is built at process start (see app/dependencies.py) and
# injected into the orchestrators. A missing API key does not stop the
# process from starting: the SDK client is simply not created and every call
# fails with UpstreamConfigError.
#
# SDK and transport failures (httpx or aiohttp, whichever transport the SDK
# picked, and timeouts) are converted to UpstreamModelError carrying the
# upstream message. No retries are performed here or anywhere else.
#
# Usage:
#   from lib.gemini_client import GeminiClient
#   gemini = GeminiClient(api_key=settings.GEMINI_API_KEY)
#   response = await gemini.generate_image(parts)
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

import aiohttp
import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from app.exceptions import UpstreamConfigError, UpstreamModelError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_TEXT_MODEL = "gemini-2.5-flash"


class GeminiClient:
    """
    Async access to the Gemini image and text models.

    Attributes:
        image_model: Model used for image edits (responds with IMAGE parts)
        text_model: Model used for text answers about an image
    """

    def __init__(
        self,
        api_key: str | None,
        image_model: str = DEFAULT_IMAGE_MODEL,
        text_model: str = DEFAULT_TEXT_MODEL,
        client: genai.Client | None = None,
    ):
        self.image_model = image_model
        self.text_model = text_model
        if client is None and api_key:
            client = genai.Client(api_key=api_key)
        self._client = client
        if self._client is None:
            logger.warning("GEMINI_API_KEY not set; image edits will fail until it is configured")

    @property
    def configured(self) -> bool:
        return self._client is not None

    def _require_client(self) -> genai.Client:
        if self._client is None:
            raise UpstreamConfigError()
        return self._client

    async def generate_image(
        self,
        parts: Sequence[types.Part],
        *,
        action: str = "edit image",
    ) -> types.GenerateContentResponse:
        """
        Send a multimodal request to the image model.

        Args:
            parts: Request parts (inline image + instruction text)
            action: Short description used in error messages

        Raises:
            UpstreamConfigError: If no API key is configured
            UpstreamModelError: If the call fails
        """
        config = types.GenerateContentConfig(response_modalities=["IMAGE"])
        return await self._generate(self.image_model, parts, config, action)

    async def generate_text(
        self,
        parts: Sequence[types.Part],
        *,
        action: str = "analyze image",
    ) -> str:
        """
        Send a multimodal request to the text model and return its text.

        Returns an empty string when the model produced no text.
        """
        response = await self._generate(self.text_model, parts, None, action)
        return (response.text or "").strip()

    async def _generate(
        self,
        model: str,
        parts: Sequence[types.Part],
        config: types.GenerateContentConfig | None,
        action: str,
    ) -> types.GenerateContentResponse:
        client = self._require_client()
        contents = [types.Content(role="user", parts=list(parts))]

        logger.info(f"Calling {model} to {action}")
        try:
            return await client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as e:
            upstream = e.message or str(e)
            logger.error(f"Gemini {model} failed to {action}: {upstream}")
            raise UpstreamModelError(f"Failed to {action}: {upstream}", upstream_message=upstream)
        except (httpx.HTTPError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            upstream = str(e) or type(e).__name__
            logger.error(f"Transport error calling {model} to {action}: {upstream}")
            raise UpstreamModelError(f"Failed to {action}: {upstream}", upstream_message=upstream)

# =============================================================================
# tests/test_gemini_client.py - Gemini Client Wrapper Tests
# =============================================================================
# This module contains tests for:
# - Request shape sent to the SDK (model, contents, response modalities)
# - Missing API key (UpstreamConfigError on call, not at construction)
# - SDK and transport errors mapped to UpstreamModelError
#
# The SDK client is a mock; no network calls are made.
# =============================================================================

import asyncio

import aiohttp
import httpx
import pytest
from google.genai import errors as genai_errors
from google.genai import types

from app.exceptions import UpstreamConfigError, UpstreamModelError
from lib.gemini_client import GeminiClient
from tests.conftest import PRODUCT_BYTES, text_response

PARTS = [
    types.Part(inline_data=types.Blob(data=PRODUCT_BYTES, mime_type="image/png")),
    types.Part(text="Edit this product image: grey."),
]


class TestConfiguration:
    """Test lazy API key handling."""

    def test_construct_without_key(self, unconfigured_gemini):
        assert unconfigured_gemini.configured is False

    def test_call_without_key_raises_config_error(self, unconfigured_gemini):
        with pytest.raises(UpstreamConfigError) as exc_info:
            asyncio.run(unconfigured_gemini.generate_image(PARTS))

        assert exc_info.value.status_code == 503

    def test_injected_client_is_configured(self, gemini):
        assert gemini.configured is True


class TestGenerate:
    """Test the calls made to the SDK."""

    def test_generate_image_requests_image_modality(self, gemini, sdk):
        asyncio.run(gemini.generate_image(PARTS))

        call = sdk.aio.models.generate_content.call_args
        assert call.kwargs["model"] == "gemini-2.5-flash-image"
        assert call.kwargs["config"].response_modalities == ["IMAGE"]
        content = call.kwargs["contents"][0]
        assert content.role == "user"
        assert content.parts == PARTS

    def test_generate_text_uses_text_model(self, sdk):
        client = GeminiClient(api_key=None, text_model="text-model", client=sdk)
        sdk.aio.models.generate_content.return_value = text_response("  studio, beach  ")

        text = asyncio.run(client.generate_text(PARTS))

        assert text == "studio, beach"
        assert sdk.aio.models.generate_content.call_args.kwargs["model"] == "text-model"


class TestErrorMapping:
    """Test failures surfacing as UpstreamModelError."""

    def test_api_error(self, gemini, sdk):
        sdk.aio.models.generate_content.side_effect = genai_errors.ClientError(
            400, {"error": {"code": 400, "message": "Image too large", "status": "INVALID_ARGUMENT"}}
        )

        with pytest.raises(UpstreamModelError) as exc_info:
            asyncio.run(gemini.generate_image(PARTS, action="edit image background"))

        assert exc_info.value.upstream_message == "Image too large"
        assert exc_info.value.message == "Failed to edit image background: Image too large"
        assert exc_info.value.status_code == 502

    def test_transport_error(self, gemini, sdk):
        sdk.aio.models.generate_content.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(UpstreamModelError) as exc_info:
            asyncio.run(gemini.generate_image(PARTS))

        assert "connection refused" in exc_info.value.message

    def test_no_retry(self, gemini, sdk):
        sdk.aio.models.generate_content.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(UpstreamModelError):
            asyncio.run(gemini.generate_image(PARTS))

        assert sdk.aio.models.generate_content.call_count == 1

    def test_aiohttp_transport_error(self, gemini, sdk):
        """The SDK uses aiohttp for async calls when it is installed."""
        sdk.aio.models.generate_content.side_effect = aiohttp.ClientConnectionError("connection reset")

        with pytest.raises(UpstreamModelError) as exc_info:
            asyncio.run(gemini.generate_image(PARTS))

        assert exc_info.value.upstream_message == "connection reset"

    def test_timeout(self, gemini, sdk):
        sdk.aio.models.generate_content.side_effect = asyncio.TimeoutError()

        with pytest.raises(UpstreamModelError) as exc_info:
            asyncio.run(gemini.generate_image(PARTS, action="analyze image"))

        assert exc_info.value.message == "Failed to analyze image: TimeoutError"

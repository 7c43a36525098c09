# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Image payload helpers shared by the routes and the orchestrators.
# Images travel as base64 text (optionally as a data URI) and are handed to
# the model as raw bytes.
# =============================================================================

import base64
import binascii
import re

from app.exceptions import InputValidationError

# Matches the prefix browsers put on FileReader results
DATA_URL_PREFIX = re.compile(r"^data:image/[\w.+-]+;base64,")

EDITED_IMAGE_MIME_TYPE = "image/png"


def strip_data_url_prefix(payload: str) -> str:
    """
    Remove a leading `data:image/...;base64,` prefix if present.

    Example:
        strip_data_url_prefix("data:image/png;base64,iVBO...")  # "iVBO..."
        strip_data_url_prefix("iVBO...")  # "iVBO..."
    """
    return DATA_URL_PREFIX.sub("", payload.strip(), count=1)


def decode_image_base64(payload: str) -> bytes:
    """
    Decode a base64 image payload (plain or data URI) into bytes.

    Raises:
        InputValidationError: If the payload is empty or not valid base64
    """
    raw = strip_data_url_prefix(payload)
    if not raw:
        raise InputValidationError("image_base64", "Image data is empty")
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError):
        raise InputValidationError("image_base64", "Image data is not valid base64")


def to_data_uri(data: bytes, mime_type: str = EDITED_IMAGE_MIME_TYPE) -> str:
    """
    Encode bytes as a base64 data URI.

    Example:
        to_data_uri(b"\\x89PNG...")  # "data:image/png;base64,iVBO..."
    """
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"

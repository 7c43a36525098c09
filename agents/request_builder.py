# =============================================================================
# agents/request_builder.py - Multimodal Request Builder
# =============================================================================
# Builds the two-part request the image model expects: the product image as
# inline data first, then the instruction text.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass

from google.genai import types

from agents.prompts.background_prompts import (
    build_edit_instruction,
    build_variation_instruction,
)


@dataclass(frozen=True)
class EditRequest:
    """An inline-image part plus an instruction-text part."""

    image_part: types.Part
    instruction_part: types.Part

    @property
    def instruction(self) -> str:
        return self.instruction_part.text or ""

    @property
    def parts(self) -> list[types.Part]:
        return [self.image_part, self.instruction_part]


def build_image_part(image_bytes: bytes, mime_type: str) -> types.Part:
    return types.Part(inline_data=types.Blob(data=image_bytes, mime_type=mime_type))


def build_request(image_bytes: bytes, mime_type: str, instruction: str) -> EditRequest:
    """Pair an image with an already-written instruction."""
    return EditRequest(
        image_part=build_image_part(image_bytes, mime_type),
        instruction_part=types.Part(text=instruction),
    )


def build_edit_request(image_bytes: bytes, mime_type: str, prompt_text: str) -> EditRequest:
    """
    Build the request for a free-form background edit.

    Example:
        request = build_edit_request(png_bytes, "image/png", "a marble countertop")
        request.instruction
        # "Edit this product image: a marble countertop. Maintain the original ..."
    """
    return build_request(image_bytes, mime_type, build_edit_instruction(prompt_text))


def build_variation_request(image_bytes: bytes, mime_type: str, style: str) -> EditRequest:
    """Build the request for one background style of a variation batch."""
    return build_request(image_bytes, mime_type, build_variation_instruction(style))

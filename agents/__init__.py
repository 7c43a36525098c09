# =============================================================================
# agents/ - Gemini Orchestration
# =============================================================================
# This package drives the image model for background replacement:
# - request_builder.py: Image part + instruction part for one model call
# - background_editor.py: Single background edit, returns a data URI
# - variation_batch.py: One edit per style, run concurrently
# - image_analyst.py: Background suggestions for a product image
#
# Prompts:
# - prompts/background_prompts.py: Instruction wording sent to the model
# =============================================================================

from agents.background_editor import BackgroundEditor, extract_inline_image
from agents.image_analyst import ImageAnalyst, parse_suggestions
from agents.request_builder import EditRequest, build_edit_request, build_variation_request
from agents.variation_batch import VariationGenerator

__all__ = [
    "BackgroundEditor",
    "extract_inline_image",
    "ImageAnalyst",
    "parse_suggestions",
    "EditRequest",
    "build_edit_request",
    "build_variation_request",
    "VariationGenerator",
]

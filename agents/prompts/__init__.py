# =============================================================================
# agents/prompts/ - Instruction Texts for the Image Model
# =============================================================================
# This package contains the instruction texts sent with product images:
# - background_prompts.py: edit, variation and suggestion instructions
# =============================================================================

from agents.prompts.background_prompts import (
    BACKGROUND_SUGGESTION_PROMPT,
    DEFAULT_BACKGROUND_SUGGESTIONS,
    build_edit_instruction,
    build_variation_instruction,
)

__all__ = [
    "BACKGROUND_SUGGESTION_PROMPT",
    "DEFAULT_BACKGROUND_SUGGESTIONS",
    "build_edit_instruction",
    "build_variation_instruction",
]

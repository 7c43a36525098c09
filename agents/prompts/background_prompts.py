# =============================================================================
# agents/prompts/background_prompts.py - Background Edit Instructions
# =============================================================================
# Instruction texts sent alongside the product image.
#
# The edit and variation wordings are part of the product's behaviour: the
# model's output depends on them, so they must not be reworded casually.
#
# Usage:
#   text = build_edit_instruction("a solid light grey background")
#   text = build_variation_instruction("modern minimalist studio")
# =============================================================================

from __future__ import annotations

EDIT_INSTRUCTION_TEMPLATE = (
    "Edit this product image: {prompt}. "
    "Maintain the original product but change the background as described. "
    "Keep the product sharp and well-defined."
)

VARIATION_INSTRUCTION_TEMPLATE = (
    "Edit this product image: Change the background to {style}. "
    "Maintain the original product perfectly but completely replace the background. "
    "Keep the product sharp and well-defined."
)

BACKGROUND_SUGGESTION_PROMPT = """Analyze this product image. Identify the main product/subject. Suggest 3-5 different background settings that would showcase this product well.
For example: "modern minimalist studio", "outdoor nature setting", "luxury showroom", "vibrant gradient", etc.
Keep suggestions short and descriptive. Output as a comma-separated list only, no explanations."""

# Used when the model answers with no text at all
DEFAULT_BACKGROUND_SUGGESTIONS = [
    "modern studio",
    "outdoor setting",
    "gradient background",
]


def build_edit_instruction(prompt: str) -> str:
    """Instruction for a free-form background edit."""
    return EDIT_INSTRUCTION_TEMPLATE.format(prompt=prompt)


def build_variation_instruction(style: str) -> str:
    """Instruction for replacing the background with one named style."""
    return VARIATION_INSTRUCTION_TEMPLATE.format(style=style)

# =============================================================================
# agents/variation_batch.py - Background Variation Batch
# =============================================================================
# Runs one background edit per requested style, concurrently, against the
# same source image.
#
# Concurrency is bounded by a semaphore (VARIATION_MAX_CONCURRENCY); styles
# beyond the bound wait for a free slot.
#
# Policies:
# - fail_fast (default): the styles run in an asyncio.TaskGroup. The first
#   failure cancels the styles still in flight and is raised unchanged; no
#   partial results are returned, even for styles that already succeeded.
# - collect: every style runs to completion and the result lists the
#   successes and the per-style failures, both in request order. A missing
#   API key still fails the whole call, since no style could ever succeed.
#
# Usage:
#   generator = VariationGenerator(editor, max_concurrency=4)
#   result = await generator.generate_variations(user, image_bytes, "image/png", ["studio", "beach"])
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from app.auth.models import AuthUser
from app.exceptions import BackdropException, InputValidationError, UpstreamConfigError
from core.identity import require_subject
from core.models.edit import (
    BatchPolicy,
    GenerateVariationsResponse,
    StyleVariation,
    StyleVariationFailure,
)
from agents.background_editor import BackgroundEditor
from agents.request_builder import build_variation_request

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 4


def _clean_styles(styles: Sequence[str]) -> list[str]:
    if not styles:
        raise InputValidationError("background_styles", "Provide at least one background style")
    cleaned = [(style or "").strip() for style in styles]
    if not all(cleaned):
        raise InputValidationError("background_styles", "Background styles cannot be empty")
    return cleaned


class VariationGenerator:
    """
    Fan-out of background edits, one per style.

    Attributes:
        editor: Performs each single edit
        max_concurrency: Upper bound on in-flight model calls per batch
        policy: Default failure policy for batches
    """

    def __init__(
        self,
        editor: BackgroundEditor,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        policy: BatchPolicy = BatchPolicy.FAIL_FAST,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.editor = editor
        self.max_concurrency = max_concurrency
        self.policy = policy

    async def generate_variations(
        self,
        user: AuthUser | None,
        image_bytes: bytes,
        mime_type: str,
        styles: Sequence[str],
        policy: BatchPolicy | None = None,
    ) -> GenerateVariationsResponse:
        """
        Generate one edited image per background style.

        Returns:
            Variations in the order of `styles` (plus failures under collect)

        Raises:
            UnauthenticatedError: If no identity is resolved
            InputValidationError: If the style list is empty or has blank entries
            BackdropException: Under fail_fast, the first failing style's error
        """
        uid = require_subject(user)
        cleaned = _clean_styles(styles)
        policy = policy or self.policy
        semaphore = asyncio.Semaphore(self.max_concurrency)

        logger.info(
            f"User {uid} requested {len(cleaned)} variations "
            f"(policy={policy.value}, max_concurrency={self.max_concurrency})"
        )

        async def run_style(style: str) -> StyleVariation:
            async with semaphore:
                request = build_variation_request(image_bytes, mime_type, style)
                image_data = await self.editor.run(
                    request,
                    style=style,
                    action=f"generate variation for style: {style}",
                )
                return StyleVariation(style=style, image_data=image_data)

        if policy is BatchPolicy.COLLECT:
            return await self._collect(cleaned, run_style)
        return await self._fail_fast(cleaned, run_style)

    async def _fail_fast(self, styles: list[str], run_style) -> GenerateVariationsResponse:
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(run_style(style)) for style in styles]
        except BaseExceptionGroup as failed:
            first = failed.exceptions[0]
            logger.error(f"Variation batch failed: {first}")
            raise first from None

        return GenerateVariationsResponse(variations=[task.result() for task in tasks])

    async def _collect(self, styles: list[str], run_style) -> GenerateVariationsResponse:
        outcomes = await asyncio.gather(
            *(run_style(style) for style in styles),
            return_exceptions=True,
        )

        variations: list[StyleVariation] = []
        failures: list[StyleVariationFailure] = []
        for style, outcome in zip(styles, outcomes):
            if isinstance(outcome, UpstreamConfigError):
                raise outcome
            if isinstance(outcome, BackdropException):
                failures.append(
                    StyleVariationFailure(style=style, code=outcome.code, message=outcome.message)
                )
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                variations.append(outcome)

        if failures:
            logger.warning(f"{len(failures)} of {len(styles)} variations failed")
        return GenerateVariationsResponse(
            success=not failures,
            variations=variations,
            failures=failures,
        )

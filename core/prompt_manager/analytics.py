"""Library statistics mixin for Prompt Manager.

Updates:
  v0.1.0 - 2026-10-07 - Expose dashboard statistics over the cached library.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..stats import DEFAULT_TOP_PROMPTS, DEFAULT_TOP_TAGS, StatsSnapshot, summarize

if TYPE_CHECKING:
    from models.category_model import Category
    from models.prompt_model import Prompt

__all__ = ["PromptAnalyticsMixin"]


class PromptAnalyticsMixin:
    """Derive read-only metrics from the cached prompts and categories."""

    _prompts: list[Prompt]
    _categories: list[Category]

    def stats(
        self,
        *,
        top_prompts: int = DEFAULT_TOP_PROMPTS,
        top_tags: int = DEFAULT_TOP_TAGS,
    ) -> StatsSnapshot:
        """Return a :class:`StatsSnapshot` for the current library."""
        return summarize(
            self._prompts,
            self._categories,
            top_prompts=top_prompts,
            top_tags=top_tags,
        )

"""Prompt refinement helpers for Prompt Manager.

Updates:
  v0.1.0 - 2026-10-09 - Route refinement requests to the configured prompt engineer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import PromptEngineeringUnavailable
from ..prompt_engineering import PromptEngineeringError

if TYPE_CHECKING:
    from ..prompt_engineering import PromptEngineer

logger = logging.getLogger(__name__)

__all__ = ["PromptRefinementMixin"]


class PromptRefinementMixin:
    """Mixin encapsulating prompt refinement."""

    _prompt_engineer: PromptEngineer | None

    @property
    def prompt_engineer(self) -> PromptEngineer | None:
        """Return the configured prompt engineering helper, if any."""
        return self._prompt_engineer

    def set_prompt_engineer(self, engineer: PromptEngineer | None) -> None:
        self._prompt_engineer = engineer

    def refine_prompt_text(self, prompt_text: str) -> str:
        """Return an improved version of *prompt_text* via LiteLLM.

        Nothing is persisted; callers decide whether to keep the result.
        """
        if not (prompt_text or "").strip():
            raise PromptEngineeringError("Prompt refinement requires non-empty prompt text.")
        engineer = self._prompt_engineer
        if engineer is None:
            raise PromptEngineeringUnavailable(
                "Prompt engineering is not configured. Set PROMPTMIND_LITELLM_MODEL "
                "to enable refinement."
            )
        refined = engineer.refine(prompt_text)
        logger.info(
            "Prompt refined",
            extra={"original_length": len(prompt_text), "refined_length": len(refined)},
        )
        return refined

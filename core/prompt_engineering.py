"""LiteLLM-backed prompt refinement.

Updates:
  v0.2.1 - 2026-10-18 - Remove unused default model constant.
  v0.2.0 - 2026-10-16 - Return the original text when the model replies with nothing.
  v0.1.1 - 2026-10-11 - Drop configured LiteLLM parameters locally before refinement calls.
  v0.1.0 - 2026-10-09 - Introduce prompt refinement helper using the engineering system prompt.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, cast

from prompt_templates import PROMPT_REFINEMENT_PROMPT

from .exceptions import PromptManagerError
from .litellm_adapter import (
    LiteLLMNotInstalledError,
    apply_configured_drop_params,
    call_completion_with_fallback,
    get_completion,
)

logger = logging.getLogger(__name__)


class PromptEngineeringError(PromptManagerError):
    """Raised when prompt refinement fails."""


def _strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapped around the whole reply."""
    stripped = text.strip()
    if stripped.startswith("```") and stripped.endswith("```"):
        lines = stripped.splitlines()
        if len(lines) >= 3:
            return "\n".join(lines[1:-1]).strip()
    return stripped


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, Mapping):
        return cast("Mapping[str, Any]", value)
    dump = getattr(value, "model_dump", None)
    if callable(dump):
        result = dump()
        if isinstance(result, Mapping):
            return cast("Mapping[str, Any]", result)
    return None


def _message_text(response: Any) -> str:
    """Return the first choice's message content, or an empty string."""
    mapping = _as_mapping(response)
    if mapping is not None:
        choices: Any = mapping.get("choices")
    else:
        choices = getattr(response, "choices", None)
    if not isinstance(choices, Sequence) or isinstance(choices, (str, bytes)) or not choices:
        return ""
    choice = _as_mapping(choices[0])
    if choice is None:
        return ""
    message = _as_mapping(choice.get("message")) or {}
    content = message.get("content")
    if content is None:
        content = choice.get("text")
    return content.strip() if isinstance(content, str) else ""


@dataclass(slots=True)
class PromptEngineer:
    """Refine prompt text with a single LiteLLM completion call."""

    model: str
    api_key: str | None = None
    api_base: str | None = None
    api_version: str | None = None
    temperature: float = 0.3
    drop_params: Sequence[str] | None = None
    system_prompt: str | None = None

    def refine(self, prompt_text: str) -> str:
        """Return an improved version of *prompt_text*.

        An empty reply from the model yields *prompt_text* unchanged.
        """
        if not (prompt_text or "").strip():
            raise PromptEngineeringError("Prompt text is required for refinement.")

        try:
            completion, lite_llm_exception = get_completion()
        except LiteLLMNotInstalledError as exc:
            raise PromptEngineeringError(str(exc)) from exc
        request: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self._system_prompt_text()},
                {"role": "user", "content": prompt_text},
            ],
            "temperature": self.temperature,
        }
        if self.api_key:
            request["api_key"] = self.api_key
        if self.api_base:
            request["api_base"] = self.api_base
        if self.api_version:
            request["api_version"] = self.api_version
        dropped = apply_configured_drop_params(request, self.drop_params)
        if dropped:
            logger.debug(
                "Dropping LiteLLM parameters for refinement",
                extra={"model": self.model, "dropped_params": list(dropped)},
            )

        logger.debug(
            "Refining prompt via LiteLLM",
            extra={"model": self.model, "prompt_length": len(prompt_text)},
        )
        try:
            response = call_completion_with_fallback(request, completion, lite_llm_exception)
        except lite_llm_exception as exc:
            raise PromptEngineeringError(f"LiteLLM refinement failed: {exc}") from exc
        except Exception as exc:  # noqa: BLE001 - provider SDKs raise their own hierarchies
            raise PromptEngineeringError("Unexpected error while calling LiteLLM") from exc

        refined = _strip_code_fence(_message_text(response))
        if not refined:
            logger.info("LiteLLM returned an empty refinement; keeping original text")
            return prompt_text
        return refined

    def _system_prompt_text(self) -> str:
        return (self.system_prompt or PROMPT_REFINEMENT_PROMPT).strip()


__all__ = ["PromptEngineer", "PromptEngineeringError"]

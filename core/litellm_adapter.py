"""LiteLLM loading and request helpers for prompt refinement.

Updates:
  v0.1.1 - 2026-10-11 - Retry completion calls without parameters a model rejects.
  v0.1.0 - 2026-10-09 - Load LiteLLM lazily and strip configured drop parameters.
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

logger = logging.getLogger("promptmind.litellm")

DEFAULT_DROP_CANDIDATES = frozenset({"max_tokens", "temperature", "timeout", "top_p"})


class LiteLLMNotInstalledError(RuntimeError):
    """Raised when LiteLLM is not available in the current environment."""


_completion: Callable[..., object] | None = None
_LiteLLMException: type[Exception] = Exception


def _ensure_loaded() -> None:
    """Import LiteLLM on first use so the CLI starts without touching it."""
    global _completion, _LiteLLMException
    if _completion is not None:
        return
    try:  # pragma: no cover - runtime import path
        litellm = importlib.import_module("litellm")
    except ImportError as exc:
        raise LiteLLMNotInstalledError(
            "Prompt refinement requires the 'litellm' package. "
            "Install it with `pip install litellm`."
        ) from exc

    completion = getattr(litellm, "completion", None)
    if completion is None:
        raise RuntimeError("litellm completion API is unavailable in the installed version.")
    exceptions_module = importlib.import_module("litellm.exceptions")
    # Releases without a shared base class raise plain provider exceptions.
    base_error = getattr(exceptions_module, "LiteLLMException", None)
    _completion = completion
    _LiteLLMException = base_error if isinstance(base_error, type) else Exception


def get_completion() -> tuple[Callable[..., object], type[Exception]]:
    """Return the LiteLLM completion callable and its exception type."""
    _ensure_loaded()
    assert _completion is not None  # pragma: no cover
    return _completion, _LiteLLMException


def apply_configured_drop_params(
    request: dict[str, object],
    drop_params: Sequence[str] | None,
) -> tuple[str, ...]:
    """Remove configured parameters from *request* and return those dropped, in order."""
    if not drop_params:
        return ()
    dropped: list[str] = []
    for raw_key in drop_params:
        key = str(raw_key).strip()
        if key and key in request and key not in dropped:
            request.pop(key)
            dropped.append(key)
    return tuple(dropped)


def call_completion_with_fallback(
    request: dict[str, object],
    completion: Callable[..., object],
    lite_llm_exception: type[Exception],
    *,
    drop_candidates: Iterable[str] | None = None,
) -> object:
    """Invoke *completion*, retrying once without parameters the model rejected."""
    try:
        return completion(**request)
    except lite_llm_exception as exc:
        unsupported = _detect_unsupported_parameters(str(exc), request.keys(), drop_candidates)
        if not unsupported:
            raise
        trimmed = {key: value for key, value in request.items() if key not in unsupported}
        logger.info(
            "LiteLLM model rejected parameters %s; retrying without them.",
            ", ".join(sorted(unsupported)),
        )
        return completion(**trimmed)


def _detect_unsupported_parameters(
    message: str,
    parameters: Iterable[str],
    drop_candidates: Iterable[str] | None = None,
) -> set[str]:
    lowered = message.lower()
    indicators = ("not support", "unsupported", "not allowed", "unexpected", "unknown")
    if not any(token in lowered for token in indicators):
        return set()
    candidates = set(drop_candidates or DEFAULT_DROP_CANDIDATES)
    unsupported: set[str] = set()
    for key in parameters:
        if key not in candidates:
            continue
        forms = (key, key.replace("_", " "), key.replace("_", "-"))
        if any(form in lowered for form in forms):
            unsupported.add(key)
    return unsupported


__all__ = [
    "DEFAULT_DROP_CANDIDATES",
    "LiteLLMNotInstalledError",
    "apply_configured_drop_params",
    "call_completion_with_fallback",
    "get_completion",
]

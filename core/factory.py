"""Factories for constructing PromptManager instances from validated settings.

Updates:
  v0.2.0 - 2026-10-16 - Report why refinement is offline when LiteLLM settings are incomplete.
  v0.1.0 - 2026-10-06 - Build repository, prompt engineer, and manager from settings.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .exceptions import PromptStorageError
from .prompt_engineering import PromptEngineer
from .prompt_manager import PromptManager
from .repository import PromptRepository, RepositoryError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from config import PromptManagerSettings

factory_logger = logging.getLogger("promptmind.factory")


def _format_missing_requirements(values: Sequence[str]) -> str:
    """Return a human-friendly list of missing configuration values."""
    entries = [value for value in values if value]
    if len(entries) <= 1:
        return "".join(entries)
    return ", ".join(entries[:-1]) + f" and {entries[-1]}"


def determine_llm_status(settings: PromptManagerSettings) -> tuple[bool, str | None]:
    """Return LiteLLM readiness plus a human-readable offline reason."""
    model = settings.litellm_model
    azure_model = bool(model) and str(model).lower().startswith("azure/")
    missing: list[str] = []
    if not model:
        missing.append("PROMPTMIND_LITELLM_MODEL")
    if not settings.litellm_api_key:
        missing.append("PROMPTMIND_LITELLM_API_KEY")
    if azure_model and not settings.litellm_api_base:
        missing.append("PROMPTMIND_LITELLM_API_BASE")
    if azure_model and not settings.litellm_api_version:
        missing.append("PROMPTMIND_LITELLM_API_VERSION")
    if not missing:
        return True, None
    reason = (
        f"LiteLLM configuration incomplete ({_format_missing_requirements(missing)}). "
        "Prompt refinement is offline; set these values via PROMPTMIND_* env/.env to enable it."
    )
    return False, reason


def build_prompt_engineer(settings: PromptManagerSettings) -> PromptEngineer | None:
    """Return a :class:`PromptEngineer` when LiteLLM is fully configured."""
    ready, reason = determine_llm_status(settings)
    if not ready:
        factory_logger.info(reason)
        return None
    assert settings.litellm_model is not None
    return PromptEngineer(
        model=settings.litellm_model,
        api_key=settings.litellm_api_key,
        api_base=settings.litellm_api_base,
        api_version=settings.litellm_api_version,
        temperature=settings.litellm_temperature,
        drop_params=settings.litellm_drop_params,
        system_prompt=settings.refinement_system_prompt,
    )


def build_prompt_manager(
    settings: PromptManagerSettings,
    *,
    repository: PromptRepository | None = None,
    prompt_engineer: PromptEngineer | None = None,
    bootstrap: bool = True,
) -> PromptManager:
    """Return a PromptManager configured from validated settings.

    When *bootstrap* is true the library is seeded (if enabled and empty) and
    loaded before the manager is returned.
    """
    if repository is None:
        try:
            repository = PromptRepository(settings.db_path)
        except RepositoryError as exc:
            raise PromptStorageError(
                f"Unable to open prompt library at {settings.db_path}"
            ) from exc
    manager = PromptManager(
        repository,
        prompt_engineer=prompt_engineer or build_prompt_engineer(settings),
        recent_limit=settings.recent_limit,
        seed_on_first_run=settings.seed_on_first_run,
    )
    if bootstrap:
        seeded = manager.bootstrap()
        factory_logger.debug(
            "Prompt manager ready",
            extra={"db_path": str(repository.db_path), "seeded": seeded},
        )
    return manager


__all__ = ["build_prompt_engineer", "build_prompt_manager", "determine_llm_status"]

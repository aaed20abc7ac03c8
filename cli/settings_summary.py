"""Printable summaries for PromptMind configuration.

Updates:
  v0.1.0 - 2026-10-08 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.factory import determine_llm_status

from .utils import describe_path, mask_secret

if TYPE_CHECKING:
    from config import PromptManagerSettings


def print_settings_summary(settings: PromptManagerSettings) -> None:
    """Emit a readable summary of core configuration and refinement readiness."""
    ready, reason = determine_llm_status(settings)
    drop_params = ", ".join(settings.litellm_drop_params or []) or "none"
    lines = [
        "PromptMind configuration",
        "========================",
        f"Database path:        {describe_path(settings.db_path, allow_missing_file=True)}",
        f"Recent view size:     {settings.recent_limit}",
        f"Seed on first run:    {'yes' if settings.seed_on_first_run else 'no'}",
        "",
        "LiteLLM refinement",
        "------------------",
        f"Model:                {settings.litellm_model or 'not set'}",
        f"API key:              {mask_secret(settings.litellm_api_key)}",
        f"API base:             {settings.litellm_api_base or 'default'}",
        f"API version:          {settings.litellm_api_version or 'default'}",
        f"Temperature:          {settings.litellm_temperature}",
        f"Dropped params:       {drop_params}",
        f"Library logging:      {'enabled' if settings.litellm_logging_enabled else 'disabled'}",
        f"Custom system prompt: {'yes' if settings.refinement_system_prompt else 'no'}",
        f"Status:               {'ready' if ready else 'offline'}",
    ]
    if reason:
        lines.append(f"  {reason}")
    print("\n".join(lines))


__all__ = ["print_settings_summary"]

"""Configuration helpers for PromptMind.

Updates: v0.1.0 - 2026-10-05 - Expose settings loader and configuration error types.
"""

from .settings import (
    DEFAULT_DB_PATH,
    DEFAULT_RECENT_LIMIT,
    ENV_PREFIX,
    PromptManagerSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "DEFAULT_DB_PATH",
    "DEFAULT_RECENT_LIMIT",
    "ENV_PREFIX",
    "PromptManagerSettings",
    "SettingsError",
    "load_settings",
]

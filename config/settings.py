"""Settings management utilities for PromptMind configuration.

Updates:
  v0.3.0 - 2026-10-16 - Add LiteLLM logging toggle and refinement prompt override.
  v0.2.1 - 2026-10-12 - Ignore API secrets placed in JSON configuration files.
  v0.2.0 - 2026-10-10 - Load .env values through python-dotenv alongside the environment.
  v0.1.0 - 2026-10-05 - Introduce pydantic settings with JSON/env layering.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

logger = logging.getLogger("promptmind.settings")

ENV_PREFIX = "PROMPTMIND_"
DEFAULT_DB_PATH = Path("data") / "promptmind.db"
DEFAULT_RECENT_LIMIT = 50
DEFAULT_CONFIG_PATH = Path("config") / "config.json"
_DOTENV_FALLBACK_PATH = ".env"

# Field name -> accepted environment keys (prefixed, plus bare upper-case provider keys).
_ENV_ALIASES: dict[str, list[str]] = {
    "db_path": ["DB_PATH", "DATABASE_PATH"],
    "recent_limit": ["RECENT_LIMIT"],
    "seed_on_first_run": ["SEED_ON_FIRST_RUN"],
    "litellm_model": ["LITELLM_MODEL"],
    "litellm_api_key": ["LITELLM_API_KEY", "GEMINI_API_KEY"],
    "litellm_api_base": ["LITELLM_API_BASE"],
    "litellm_api_version": ["LITELLM_API_VERSION"],
    "litellm_temperature": ["LITELLM_TEMPERATURE"],
    "litellm_drop_params": ["LITELLM_DROP_PARAMS"],
    "litellm_logging_enabled": ["LITELLM_LOGGING_ENABLED"],
    "refinement_system_prompt": ["REFINEMENT_SYSTEM_PROMPT"],
}

_JSON_KEYS = (
    "db_path",
    "recent_limit",
    "seed_on_first_run",
    "litellm_model",
    "litellm_api_base",
    "litellm_api_version",
    "litellm_temperature",
    "litellm_drop_params",
    "litellm_logging_enabled",
    "refinement_system_prompt",
)
_JSON_SECRET_KEYS = frozenset({"litellm_api_key", "LITELLM_API_KEY", "GEMINI_API_KEY"})


class SettingsError(Exception):
    """Raised when PromptMind configuration cannot be loaded or validated."""


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv(f"{ENV_PREFIX}ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class PromptManagerSettings(BaseSettings):
    """Application configuration sourced from keyword arguments, JSON, and the environment."""

    db_path: Path = Field(default=DEFAULT_DB_PATH, validate_default=True)
    recent_limit: int = Field(
        default=DEFAULT_RECENT_LIMIT,
        description="Number of most recently updated prompts shown by the recent view.",
    )
    seed_on_first_run: bool = Field(
        default=True,
        description="Store the starter categories and sample prompts when the library is empty.",
    )
    litellm_model: str | None = Field(
        default=None,
        description="LiteLLM model identifier used for prompt refinement.",
    )
    litellm_api_key: str | None = Field(
        default=None,
        description="LiteLLM API key (environment only).",
        repr=False,
    )
    litellm_api_base: str | None = Field(
        default=None,
        description="Optional LiteLLM API base URL override.",
    )
    litellm_api_version: str | None = Field(
        default=None,
        description="Optional LiteLLM API version (useful for Azure OpenAI).",
    )
    litellm_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    litellm_drop_params: list[str] | None = Field(
        default=None,
        description="LiteLLM parameters to drop before forwarding requests.",
    )
    litellm_logging_enabled: bool = Field(
        default=False,
        description="Let LiteLLM's own loggers emit INFO records.",
    )
    refinement_system_prompt: str | None = Field(
        default=None,
        description="Override for the refinement system prompt.",
    )

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("db_path", mode="before")
    def _normalise_path(cls, value: Any) -> Path:
        """Expand user-relative paths and coerce values to Path instances."""
        if value is None or not str(value).strip():
            raise ValueError("a filesystem path is required")
        return Path(str(value).strip()).expanduser().resolve()

    @field_validator("recent_limit")
    def _validate_recent_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("recent_limit must be greater than zero")
        return value

    @field_validator(
        "litellm_model",
        "litellm_api_key",
        "litellm_api_base",
        "litellm_api_version",
        "refinement_system_prompt",
        mode="before",
    )
    def _strip_strings(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None

    @field_validator("litellm_drop_params", mode="before")
    def _normalise_drop_params(cls, value: object) -> list[str] | None:
        if value in (None, "", [], ()):  # type: ignore[comparison-overlap]
            return None
        if isinstance(value, str):
            stripped = value.strip()
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError:
                items = [item.strip() for item in stripped.split(",") if item.strip()]
            else:
                if isinstance(parsed, Sequence) and not isinstance(parsed, (str, bytes)):
                    items = [str(item).strip() for item in parsed if str(item).strip()]
                else:
                    items = [str(parsed).strip()]
            return items or None
        if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
            sequence_value = cast("Sequence[object]", value)
            items = [str(item).strip() for item in sequence_value if str(item).strip()]
            return items or None
        raise ValueError(
            "litellm_drop_params must be a list, comma-separated string, or JSON array"
        )

    @property
    def refinement_enabled(self) -> bool:
        """Return True when both a LiteLLM model and API key are configured."""
        return bool(self.litellm_model and self.litellm_api_key)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(db_path="...")).
            2. JSON configuration file.
            3. Environment variables and ``.env`` entries.
            4. File secrets.
        """

        def env_with_aliases(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            dotenv_data = _read_dotenv_values()

            def _lookup(candidate: str) -> str | None:
                value = os.getenv(candidate)
                if value is None:
                    value = dotenv_data.get(candidate)
                if value is None:
                    return None
                stripped_value = str(value).strip()
                return stripped_value or None

            for field, keys in _ENV_ALIASES.items():
                candidates = [f"{ENV_PREFIX}{key}" for key in keys]
                # Provider keys are also honoured without the prefix.
                candidates.extend(key for key in keys if key.startswith(("LITELLM_", "GEMINI_")))
                for candidate in candidates:
                    val = _lookup(candidate)
                    if val is not None:
                        data[field] = val
                        break
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_aliases),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv(f"{ENV_PREFIX}CONFIG_JSON")
            if explicit_path:
                path = Path(explicit_path).expanduser()
                if not path.exists():
                    raise SettingsError(f"Configuration file not found: {path}")
            else:
                path = DEFAULT_CONFIG_PATH
                if not path.exists():
                    return {}
            try:
                raw_contents = path.read_text(encoding="utf-8")
            except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                raise SettingsError(f"Unable to read configuration file: {path}") from exc
            try:
                data = json.loads(raw_contents)
            except json.JSONDecodeError as exc:
                raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
            if not isinstance(data, dict):
                raise SettingsError(f"Configuration file {path} must contain a JSON object")

            mapping_data = cast("Mapping[object, Any]", data)
            data_dict = {str(key): value for key, value in mapping_data.items()}
            removed_secrets = sorted(key for key in _JSON_SECRET_KEYS if key in data_dict)
            if removed_secrets:
                logger.warning(
                    "Ignoring secret key(s) %s in configuration file %s; "
                    "set credentials via environment variables instead.",
                    ", ".join(removed_secrets),
                    path,
                )
            mapped: dict[str, Any] = {}
            if "database_path" in data_dict and "db_path" not in data_dict:
                mapped["db_path"] = data_dict["database_path"]
            for key in _JSON_KEYS:
                if key in data_dict:
                    mapped[key] = data_dict[key]
            return mapped

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> PromptManagerSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return PromptManagerSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid PromptMind configuration") from exc


__all__ = [
    "DEFAULT_DB_PATH",
    "DEFAULT_RECENT_LIMIT",
    "ENV_PREFIX",
    "PromptManagerSettings",
    "SettingsError",
    "load_settings",
]

"""Runtime boot helpers for the PromptMind CLI.

Updates:
  v0.1.1 - 2026-10-16 - Add LiteLLM logging toggle helper.
  v0.1.0 - 2026-10-08 - Extract logging configuration helpers.
"""

from __future__ import annotations

import configparser
import logging
import logging.config
from pathlib import Path

DEFAULT_LOGGING_CONFIG = Path("config") / "logging.conf"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(logging_conf_path: Path | None) -> None:
    """Configure logging using *logging_conf_path* when available.

    Falls back to ``basicConfig`` at INFO when the file is absent or invalid.
    """
    path = logging_conf_path or DEFAULT_LOGGING_CONFIG
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except (configparser.Error, KeyError, ValueError, OSError) as exc:
            logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)
            logging.getLogger("promptmind.main").warning(
                "Ignoring invalid logging configuration %s: %s", path, exc
            )
            return
    logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)


def configure_litellm_logging(enabled: bool) -> None:
    """Enable or disable upstream LiteLLM library logs."""
    litellm_loggers = (
        logging.getLogger("LiteLLM"),
        logging.getLogger("LiteLLM Router"),
        logging.getLogger("litellm"),
    )
    for litellm_logger in litellm_loggers:
        litellm_logger.propagate = True
        if enabled:
            litellm_logger.disabled = False
            litellm_logger.setLevel(logging.NOTSET)
        else:
            litellm_logger.disabled = True
            litellm_logger.setLevel(logging.CRITICAL)


__all__ = ["DEFAULT_LOGGING_CONFIG", "configure_litellm_logging", "setup_logging"]

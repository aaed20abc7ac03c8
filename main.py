"""Application entry point for PromptMind.

Updates:
  v0.2.0 - 2026-10-16 - Apply LiteLLM logging toggle from settings and map errors to exit codes.
  v0.1.0 - 2026-10-08 - Wire settings, manager bootstrap, and CLI commands.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cli.commands import COMMAND_SPECS, dispatch
from cli.parser import parse_args
from cli.runtime import configure_litellm_logging, setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import PromptManagerError, build_prompt_manager

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

    from config import PromptManagerSettings
    from core.prompt_manager import PromptManager

EXIT_SETTINGS = 2
EXIT_INIT = 3


def _initialise_manager(
    settings: PromptManagerSettings,
    logger: logging.Logger,
) -> PromptManager | None:
    try:
        return build_prompt_manager(settings)
    except PromptManagerError as exc:
        logger.error("Failed to initialise services: %s", exc)
        return None


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, services, and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config)

    logger = logging.getLogger("promptmind.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        cause = f" ({exc.__cause__})" if exc.__cause__ else ""
        logger.error("Failed to load settings: %s%s", exc, cause)
        return EXIT_SETTINGS

    configure_litellm_logging(settings.litellm_logging_enabled)
    if args.print_settings:
        print_settings_summary(settings)
        return 0

    spec = COMMAND_SPECS[getattr(args, "command", None)]
    manager = _initialise_manager(settings, logger)
    if manager is None:
        return EXIT_INIT
    with manager:
        return dispatch(spec, manager, args, logger)


if __name__ == "__main__":
    raise SystemExit(main())

"""Shared CLI utility functions for PromptMind commands.

Updates:
  v0.1.0 - 2026-10-08 - Add stdout logging, masking, path, and prompt formatting helpers.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Mapping
    from datetime import datetime
    from logging import Logger

    from models.category_model import Category
    from models.prompt_model import Prompt


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def mask_secret(value: str | None) -> str:
    """Return an obfuscated representation of secret configuration values."""
    if not value:
        return "not set"
    secret = value.strip()
    if len(secret) <= 6:
        return "set (****)"
    return f"set ({secret[:4]}...{secret[-4:]})"


def describe_path(path_value: object, *, allow_missing_file: bool = False) -> str:
    """Return a human-friendly description of a file path's state."""
    if path_value is None:
        return "not set"
    resolved = Path(str(path_value)).expanduser()
    if resolved.exists():
        if resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"
    message = f"{resolved} (missing)"
    if allow_missing_file:
        message = f"{resolved} (missing - created on demand)"
    if not resolved.parent.exists():
        message += f", parent missing: {resolved.parent}"
    return message


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return "never"
    return value.strftime("%Y-%m-%d %H:%M")


def category_label(category_id: str | None, categories: Mapping[str, Category]) -> str:
    """Return the display name for *category_id*."""
    if category_id is None:
        return "Uncategorized"
    category = categories.get(category_id)
    return category.name if category else f"{category_id} (missing)"


def format_prompt_row(prompt: Prompt, categories: Mapping[str, Category]) -> str:
    """Return a one-line listing entry for *prompt*."""
    marker = "*" if prompt.is_favorite else " "
    tags = f"  #{' #'.join(prompt.tags)}" if prompt.tags else ""
    return (
        f"{marker} {prompt.id}  {prompt.title}  "
        f"[{category_label(prompt.category_id, categories)}]  "
        f"used {prompt.usage_count}x{tags}"
    )


def format_prompt_details(prompt: Prompt, categories: Mapping[str, Category]) -> str:
    """Return a multi-line description of *prompt*."""
    lines = [
        f"Title:     {prompt.title}",
        f"ID:        {prompt.id}",
        f"Category:  {category_label(prompt.category_id, categories)}",
        f"Tags:      {', '.join(prompt.tags) if prompt.tags else '-'}",
        f"Favorite:  {'yes' if prompt.is_favorite else 'no'}",
        f"Usage:     {prompt.usage_count} (last used {format_timestamp(prompt.last_used_at)})",
        f"Created:   {format_timestamp(prompt.created_at)}",
        f"Updated:   {format_timestamp(prompt.updated_at)}",
        "",
        prompt.content,
    ]
    return "\n".join(lines)


__all__ = [
    "category_label",
    "describe_path",
    "format_prompt_details",
    "format_prompt_row",
    "format_timestamp",
    "mask_secret",
    "print_and_log",
]

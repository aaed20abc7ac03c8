"""Argument parser for the PromptMind CLI.

Updates:
  v0.2.0 - 2026-10-16 - Add refine, usage reset, and category rename/move commands.
  v0.1.0 - 2026-10-08 - Introduce prompt and category subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(
        prog="promptmind",
        description="Personal prompt library with categories, search, and usage statistics",
    )
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List prompts in a view.")
    list_parser.add_argument(
        "--scope",
        default="all",
        help="View to list: all, favorites, recent, or a category id (default: all).",
    )
    list_parser.add_argument("--search", default=None, help="Case-insensitive text filter.")

    show_parser = subparsers.add_parser("show", help="Show a prompt in full.")
    show_parser.add_argument("prompt_id")

    add_parser = subparsers.add_parser("add", help="Create a prompt.")
    add_parser.add_argument("--title", required=True)
    add_parser.add_argument("--content", required=True)
    add_parser.add_argument("--category", default=None, help="Category id.")
    add_parser.add_argument("--tags", default=None, help="Comma-separated tags.")
    add_parser.add_argument("--favorite", action="store_true", help="Mark as favourite.")

    edit_parser = subparsers.add_parser("edit", help="Edit a prompt.")
    edit_parser.add_argument("prompt_id")
    edit_parser.add_argument("--title", default=None)
    edit_parser.add_argument("--content", default=None)
    category_group = edit_parser.add_mutually_exclusive_group()
    category_group.add_argument("--category", default=None, help="New category id.")
    category_group.add_argument(
        "--uncategorize",
        action="store_true",
        help="Remove the prompt from its category.",
    )
    edit_parser.add_argument("--tags", default=None, help="Replacement comma-separated tags.")

    for name, help_text in (
        ("favorite", "Toggle the favourite flag of a prompt."),
        ("copy", "Print a prompt's content and record one use."),
        ("reset-usage", "Reset a prompt's usage counter."),
        ("delete", "Delete a prompt."),
    ):
        command_parser = subparsers.add_parser(name, help=help_text)
        command_parser.add_argument("prompt_id")

    subparsers.add_parser("categories", help="Show the category tree.")

    category_add = subparsers.add_parser("category-add", help="Create a category.")
    category_add.add_argument("name")
    category_add.add_argument("--parent", default=None, help="Parent category id.")
    category_add.add_argument("--icon", default=None)
    category_add.add_argument("--color", default=None)

    category_rename = subparsers.add_parser("category-rename", help="Rename a category.")
    category_rename.add_argument("category_id")
    category_rename.add_argument("name")

    category_move = subparsers.add_parser("category-move", help="Reparent a category.")
    category_move.add_argument("category_id")
    category_move.add_argument(
        "--parent",
        default=None,
        help="New parent category id (omit to make it a root).",
    )

    category_delete = subparsers.add_parser(
        "category-delete",
        help="Delete a category; its prompts become uncategorized.",
    )
    category_delete.add_argument("category_id")

    subparsers.add_parser("stats", help="Show library statistics.")

    refine_parser = subparsers.add_parser("refine", help="Refine prompt text via LiteLLM.")
    source_group = refine_parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument("prompt_id", nargs="?", default=None)
    source_group.add_argument("--text", default=None, help="Refine ad-hoc text instead.")
    refine_parser.add_argument(
        "--apply",
        action="store_true",
        help="Save the refined text as the prompt's content.",
    )

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the PromptMind launcher."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args"]

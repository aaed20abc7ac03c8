"""CLI command handlers for PromptMind.

Updates:
  v0.2.0 - 2026-10-16 - Map manager errors to stable exit codes in one dispatcher.
  v0.1.0 - 2026-10-08 - Introduce prompt, category, statistics, and refine handlers.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core import (
    CategoryNotFoundError,
    CategoryValidationError,
    PromptEngineeringError,
    PromptEngineeringUnavailable,
    PromptNotFoundError,
    PromptStorageError,
    PromptValidationError,
)

from .utils import format_prompt_details, format_prompt_row, print_and_log

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core.prompt_manager import PromptManager
    from models.category_model import Category

CommandHandler = Callable[["PromptManager", argparse.Namespace, logging.Logger], int]

EXIT_OK = 0
EXIT_NOT_FOUND = 4
EXIT_INVALID = 5
EXIT_STORAGE = 6


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler
    requires_manager: bool = True


def _category_index(manager: PromptManager) -> dict[str, Category]:
    return {category.id: category for category in manager.categories}


def run_list(manager: PromptManager, args: argparse.Namespace, logger: logging.Logger) -> int:
    scope = getattr(args, "scope", None) or "all"
    prompts = manager.query(scope, getattr(args, "search", None))
    logger.debug("Listing prompts", extra={"scope": scope, "count": len(prompts)})
    if not prompts:
        print("No prompts found.")
        return EXIT_OK
    categories = _category_index(manager)
    for prompt in prompts:
        print(format_prompt_row(prompt, categories))
    return EXIT_OK


def run_show(manager: PromptManager, args: argparse.Namespace, logger: logging.Logger) -> int:
    del logger
    prompt = manager.get_prompt(args.prompt_id)
    print(format_prompt_details(prompt, _category_index(manager)))
    return EXIT_OK


def run_add(manager: PromptManager, args: argparse.Namespace, logger: logging.Logger) -> int:
    prompt = manager.create_prompt(
        args.title,
        args.content,
        category_id=args.category,
        tags=args.tags,
        is_favorite=bool(args.favorite),
    )
    print_and_log(logger, logging.INFO, f"Created prompt {prompt.id} ({prompt.title})")
    return EXIT_OK


def run_edit(manager: PromptManager, args: argparse.Namespace, logger: logging.Logger) -> int:
    changes: dict[str, object] = {}
    if args.title is not None:
        changes["title"] = args.title
    if args.content is not None:
        changes["content"] = args.content
    if args.uncategorize:
        changes["category_id"] = None
    elif args.category is not None:
        changes["category_id"] = args.category
    if args.tags is not None:
        changes["tags"] = args.tags
    if not changes:
        print("Nothing to update.")
        return EXIT_OK
    prompt = manager.update_prompt(args.prompt_id, **changes)
    print_and_log(logger, logging.INFO, f"Updated prompt {prompt.id} ({prompt.title})")
    return EXIT_OK


def run_favorite(manager: PromptManager, args: argparse.Namespace, logger: logging.Logger) -> int:
    prompt = manager.toggle_favorite(args.prompt_id)
    state = "added to" if prompt.is_favorite else "removed from"
    print_and_log(logger, logging.INFO, f"Prompt {prompt.id} {state} favorites")
    return EXIT_OK


def run_copy(manager: PromptManager, args: argparse.Namespace, logger: logging.Logger) -> int:
    prompt = manager.record_usage(args.prompt_id)
    logger.debug("Prompt copied", extra={"prompt_id": prompt.id})
    print(prompt.content)
    return EXIT_OK


def run_reset_usage(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    prompt = manager.reset_usage(args.prompt_id)
    print_and_log(logger, logging.INFO, f"Usage counter reset for prompt {prompt.id}")
    return EXIT_OK


def run_delete(manager: PromptManager, args: argparse.Namespace, logger: logging.Logger) -> int:
    manager.delete_prompt(args.prompt_id)
    print_and_log(logger, logging.INFO, f"Deleted prompt {args.prompt_id}")
    return EXIT_OK


def run_categories(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    del args, logger
    tree = manager.category_tree()
    if not len(tree):
        print("No categories defined.")
        return EXIT_OK
    counts: dict[str, int] = {}
    for prompt in manager.prompts:
        if prompt.category_id is not None:
            counts[prompt.category_id] = counts.get(prompt.category_id, 0) + 1
    for category, depth in tree.walk():
        indent = "  " * depth
        print(f"{indent}- {category.name} ({category.id}) [{counts.get(category.id, 0)}]")
    return EXIT_OK


def run_category_add(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    options: dict[str, str] = {}
    if args.icon:
        options["icon"] = args.icon
    if args.color:
        options["color"] = args.color
    category = manager.create_category(args.name, args.parent, **options)
    print_and_log(logger, logging.INFO, f"Created category {category.id} ({category.name})")
    return EXIT_OK


def run_category_rename(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    category = manager.rename_category(args.category_id, args.name)
    print_and_log(logger, logging.INFO, f"Renamed category {category.id} to {category.name}")
    return EXIT_OK


def run_category_move(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    category = manager.move_category(args.category_id, args.parent)
    target = category.parent_id or "top level"
    print_and_log(logger, logging.INFO, f"Moved category {category.id} under {target}")
    return EXIT_OK


def run_category_delete(
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    affected = manager.delete_category(args.category_id)
    print_and_log(
        logger,
        logging.INFO,
        f"Deleted category {args.category_id}; {affected} prompt(s) uncategorized",
    )
    return EXIT_OK


def run_stats(manager: PromptManager, args: argparse.Namespace, logger: logging.Logger) -> int:
    del args, logger
    snapshot = manager.stats()
    print(f"Prompts:   {snapshot.total_prompts}")
    print(f"Favorites: {snapshot.total_favorites}")
    print(f"Usage:     {snapshot.total_usage}")
    print("\nMost used:")
    if not snapshot.most_used:
        print("  (no usage recorded)")
    for prompt in snapshot.most_used:
        print(f"  {prompt.usage_count:>4}  {prompt.title}")
    print("\nCategories:")
    if not snapshot.category_distribution:
        print("  (no prompts)")
    for share in snapshot.category_distribution:
        print(f"  {share.percentage:>3}%  {share.count:>4}  {share.name}")
    print("\nTop tags:")
    if not snapshot.top_tags:
        print("  (no tags)")
    for tag in snapshot.top_tags:
        print(f"  {tag.count:>4}  #{tag.tag}")
    return EXIT_OK


def run_refine(manager: PromptManager, args: argparse.Namespace, logger: logging.Logger) -> int:
    prompt_id = getattr(args, "prompt_id", None)
    if prompt_id is None:
        if args.apply:
            print("--apply requires a prompt id.")
            return EXIT_INVALID
        print(manager.refine_prompt_text(args.text))
        return EXIT_OK
    prompt = manager.get_prompt(prompt_id)
    refined = manager.refine_prompt_text(prompt.content)
    if args.apply:
        manager.update_prompt(prompt.id, content=refined)
        print_and_log(logger, logging.INFO, f"Saved refined content to prompt {prompt.id}")
        return EXIT_OK
    print(refined)
    return EXIT_OK


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    None: CommandSpec(run_list),
    "list": CommandSpec(run_list),
    "show": CommandSpec(run_show),
    "add": CommandSpec(run_add),
    "edit": CommandSpec(run_edit),
    "favorite": CommandSpec(run_favorite),
    "copy": CommandSpec(run_copy),
    "reset-usage": CommandSpec(run_reset_usage),
    "delete": CommandSpec(run_delete),
    "categories": CommandSpec(run_categories),
    "category-add": CommandSpec(run_category_add),
    "category-rename": CommandSpec(run_category_rename),
    "category-move": CommandSpec(run_category_move),
    "category-delete": CommandSpec(run_category_delete),
    "stats": CommandSpec(run_stats),
    "refine": CommandSpec(run_refine),
}


def dispatch(
    spec: CommandSpec,
    manager: PromptManager,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    """Run *spec* and translate manager errors into exit codes."""
    try:
        return spec.handler(manager, args, logger)
    except (PromptNotFoundError, CategoryNotFoundError) as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_NOT_FOUND
    except (
        PromptValidationError,
        CategoryValidationError,
        PromptEngineeringError,
        PromptEngineeringUnavailable,
    ) as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_INVALID
    except PromptStorageError as exc:
        logger.error("Storage failure: %s", exc, exc_info=exc.__cause__ is not None)
        print(f"Storage failure: {exc}")
        return EXIT_STORAGE


__all__ = [
    "COMMAND_SPECS",
    "CommandSpec",
    "EXIT_INVALID",
    "EXIT_NOT_FOUND",
    "EXIT_OK",
    "EXIT_STORAGE",
    "dispatch",
]

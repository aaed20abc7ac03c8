"""Category management helpers for Prompt Manager.

Updates:
  v0.2.0 - 2026-10-15 - Add reparenting with cycle checks and transactional delete cascade.
  v0.1.0 - 2026-10-06 - Extract category APIs into mixin.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from models.category_model import DEFAULT_CATEGORY_COLOR, DEFAULT_CATEGORY_ICON, Category

from ..category_tree import CategoryTree
from ..exceptions import (
    CategoryCycleError,
    CategoryNotFoundError,
    CategoryValidationError,
    PromptStorageError,
)
from ..repository import RepositoryError

if TYPE_CHECKING:
    from datetime import datetime

    from ..repository import PromptRepository

logger = logging.getLogger(__name__)

__all__ = ["CategorySupport"]


class CategorySupport:
    """Mixin exposing category CRUD helpers backed by the repository."""

    _repository: PromptRepository
    _categories: list[Category]

    def _now(self) -> datetime:  # pragma: no cover - provided by PromptManager
        raise NotImplementedError

    def refresh(self) -> None:  # pragma: no cover - provided by PromptManager
        raise NotImplementedError

    def get_category(self, category_id: str) -> Category:
        """Return the cached category or raise :class:`CategoryNotFoundError`."""
        for category in self._categories:
            if category.id == category_id:
                return category
        raise CategoryNotFoundError(f"Category {category_id} not found")

    def create_category(
        self,
        name: str,
        parent_id: str | None = None,
        *,
        icon: str | None = DEFAULT_CATEGORY_ICON,
        color: str | None = DEFAULT_CATEGORY_COLOR,
    ) -> Category:
        """Create a category under *parent_id*, which must exist when given."""
        if parent_id is not None:
            self.get_category(parent_id)
        category = Category.create(name, parent_id, icon=icon, color=color)
        self._save_category(category)
        logger.info("Category created", extra={"category_id": category.id})
        return category

    def rename_category(self, category_id: str, name: str) -> Category:
        """Give a category a new display name."""
        updated = replace(self.get_category(category_id), name=name)
        self._save_category(updated)
        return updated

    def move_category(self, category_id: str, new_parent_id: str | None) -> Category:
        """Reparent a category; ``None`` makes it a root.

        Raises :class:`CategoryCycleError` when the new parent is the category
        itself or one of its descendants.
        """
        current = self.get_category(category_id)
        if new_parent_id is not None:
            self.get_category(new_parent_id)
        if CategoryTree(self._categories).would_create_cycle(category_id, new_parent_id):
            raise CategoryCycleError(
                f"Cannot move category {category_id} under its own descendant {new_parent_id}"
            )
        updated = replace(current, parent_id=new_parent_id)
        self._save_category(updated)
        logger.info(
            "Category moved",
            extra={"category_id": category_id, "parent_id": new_parent_id},
        )
        return updated

    def delete_category(self, category_id: str) -> int:
        """Uncategorise the category's prompts, then delete it.

        Child categories are kept and become roots with a dangling parent.
        Deleting an unknown id is a no-op. Returns the number of prompts
        uncategorised.
        """
        try:
            affected = self._repository.uncategorize_and_delete_category(
                category_id,
                now=self._now(),
            )
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to delete category {category_id}") from exc
        self.refresh()
        return affected

    def _save_category(self, category: Category) -> None:
        try:
            category.validate()
        except ValueError as exc:
            raise CategoryValidationError(str(exc)) from exc
        try:
            self._repository.put_category(category)
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to persist category {category.id}") from exc
        self.refresh()

"""Prompt lifecycle helpers for Prompt Manager.

Updates:
  v0.2.0 - 2026-10-15 - Record copy events and explicit usage resets.
  v0.1.0 - 2026-10-06 - Extract prompt CRUD into mixin.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from models.prompt_model import Prompt

from ..exceptions import (
    CategoryNotFoundError,
    PromptNotFoundError,
    PromptStorageError,
    PromptValidationError,
)
from ..repository import RepositoryError

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from datetime import datetime

    from models.category_model import Category

    from ..repository import PromptRepository

logger = logging.getLogger(__name__)

__all__ = ["PromptLifecycleMixin"]

_EDITABLE_FIELDS = frozenset({"title", "content", "category_id", "tags", "is_favorite"})


class PromptLifecycleMixin:
    """Prompt CRUD and usage tracking with write-through persistence."""

    _repository: PromptRepository
    _prompts: list[Prompt]
    _categories: list[Category]

    def _now(self) -> datetime:  # pragma: no cover - provided by PromptManager
        raise NotImplementedError

    def refresh(self) -> None:  # pragma: no cover - provided by PromptManager
        raise NotImplementedError

    def get_prompt(self, prompt_id: str) -> Prompt:
        """Return the prompt with *prompt_id* from the cache, falling back to SQLite."""
        for prompt in self._prompts:
            if prompt.id == prompt_id:
                return prompt
        try:
            stored = self._repository.get_prompt(prompt_id)
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to fetch prompt {prompt_id}") from exc
        if stored is None:
            raise PromptNotFoundError(f"Prompt {prompt_id} not found")
        return stored

    def create_prompt(
        self,
        title: str,
        content: str,
        *,
        category_id: str | None = None,
        tags: Iterable[Any] | str | None = None,
        is_favorite: bool = False,
    ) -> Prompt:
        """Validate and persist a new prompt."""
        prompt = Prompt.create(
            title,
            content,
            category_id=category_id,
            tags=tags,
            is_favorite=is_favorite,
            now=self._now(),
        )
        self._save_prompt(prompt)
        logger.info("Prompt created", extra={"prompt_id": prompt.id})
        return prompt

    def update_prompt(self, prompt_id: str, **changes: Any) -> Prompt:
        """Merge *changes* into the stored prompt and save it wholesale.

        Only ``title``, ``content``, ``category_id``, ``tags``, and
        ``is_favorite`` may be edited; ``updated_at`` is refreshed.
        """
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise TypeError(f"Unsupported prompt fields: {', '.join(sorted(unknown))}")
        current = self.get_prompt(prompt_id)
        updated = current.touched(self._now(), **changes)
        self._save_prompt(updated, check_category=updated.category_id != current.category_id)
        return updated

    def toggle_favorite(self, prompt_id: str) -> Prompt:
        """Flip the favourite flag of a prompt."""
        current = self.get_prompt(prompt_id)
        updated = current.touched(self._now(), is_favorite=not current.is_favorite)
        self._save_prompt(updated, check_category=False)
        return updated

    def record_usage(self, prompt_id: str) -> Prompt:
        """Count one copy event: usage + 1 and ``last_used_at`` set to now."""
        updated = self.get_prompt(prompt_id).with_usage(self._now())
        self._save_prompt(updated, check_category=False)
        logger.debug(
            "Prompt usage recorded",
            extra={"prompt_id": prompt_id, "usage_count": updated.usage_count},
        )
        return updated

    def reset_usage(self, prompt_id: str) -> Prompt:
        """Explicitly reset the usage counter; the only way it ever decreases."""
        current = self.get_prompt(prompt_id)
        updated = current.touched(self._now(), usage_count=0, last_used_at=None)
        self._save_prompt(updated, check_category=False)
        logger.info("Prompt usage reset", extra={"prompt_id": prompt_id})
        return updated

    def delete_prompt(self, prompt_id: str) -> None:
        """Remove a prompt; deleting an unknown id is a no-op."""
        try:
            self._repository.delete_prompt(prompt_id)
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to delete prompt {prompt_id}") from exc
        self.refresh()

    def _save_prompt(self, prompt: Prompt, *, check_category: bool = True) -> None:
        try:
            prompt.validate()
        except ValueError as exc:
            raise PromptValidationError(str(exc)) from exc
        if check_category and prompt.category_id is not None:
            if not any(category.id == prompt.category_id for category in self._categories):
                raise CategoryNotFoundError(f"Category {prompt.category_id} not found")
        try:
            self._repository.put_prompt(prompt)
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to persist prompt {prompt.id}") from exc
        self.refresh()

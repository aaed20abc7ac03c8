"""Prompt Manager package façade and orchestration layer.

The manager owns the repository and an in-memory copy of both collections.
Every mutation writes through to SQLite and then refreshes that copy, so reads
never observe a state the database does not hold.

Updates:
  v0.3.0 - 2026-10-16 - Add refinement, analytics, and search mixins.
  v0.2.0 - 2026-10-14 - Split prompt and category APIs into mixins.
  v0.1.0 - 2026-10-06 - Introduce write-through cache over the SQLite repository.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ..category_tree import CategoryTree
from ..exceptions import (
    CategoryCycleError,
    CategoryError,
    CategoryNotFoundError,
    CategoryValidationError,
    PromptEngineeringUnavailable,
    PromptManagerError,
    PromptNotFoundError,
    PromptStorageError,
    PromptValidationError,
)
from ..query import DEFAULT_RECENT_LIMIT
from ..repository import PromptRepository, RepositoryError
from .analytics import PromptAnalyticsMixin
from .categories import CategorySupport
from .lifecycle import PromptLifecycleMixin
from .refinement import PromptRefinementMixin
from .search import PromptSearchMixin

if TYPE_CHECKING:  # pragma: no cover - typing only
    from collections.abc import Callable
    from pathlib import Path
    from types import TracebackType

    from models.category_model import Category
    from models.prompt_model import Prompt

    from ..prompt_engineering import PromptEngineer

logger = logging.getLogger(__name__)

__all__ = [
    "CategoryCycleError",
    "CategoryError",
    "CategoryNotFoundError",
    "CategoryValidationError",
    "PromptEngineeringUnavailable",
    "PromptManager",
    "PromptManagerError",
    "PromptNotFoundError",
    "PromptStorageError",
    "PromptValidationError",
]


class PromptManager(
    PromptLifecycleMixin,
    CategorySupport,
    PromptSearchMixin,
    PromptAnalyticsMixin,
    PromptRefinementMixin,
):
    """Manage prompts and categories through a write-through cached repository."""

    def __init__(
        self,
        repository: PromptRepository,
        *,
        prompt_engineer: PromptEngineer | None = None,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
        seed_on_first_run: bool = True,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Bind the manager to *repository* without touching storage yet.

        Call :meth:`bootstrap` (or :meth:`refresh`) before reading.
        """
        if recent_limit <= 0:
            raise ValueError("recent_limit must be greater than zero")
        self._repository = repository
        self._prompt_engineer = prompt_engineer
        self._recent_limit = recent_limit
        self._seed_on_first_run = seed_on_first_run
        self._clock = clock or (lambda: datetime.now(UTC))
        self._prompts: list[Prompt] = []
        self._categories: list[Category] = []
        self._closed = False

    # Properties --------------------------------------------------------- #

    @property
    def repository(self) -> PromptRepository:
        """Expose the underlying repository for maintenance tasks."""
        return self._repository

    @property
    def db_path(self) -> Path:
        return self._repository.db_path

    @property
    def recent_limit(self) -> int:
        return self._recent_limit

    @property
    def prompts(self) -> list[Prompt]:
        """Return the cached prompts, most recently updated first."""
        return list(self._prompts)

    @property
    def categories(self) -> list[Category]:
        """Return the cached categories in storage order."""
        return list(self._categories)

    # Cache management ---------------------------------------------------- #

    def _now(self) -> datetime:
        return self._clock()

    def bootstrap(self) -> bool:
        """Seed the starter catalogue when enabled and empty, then load the cache.

        Returns True when seed data was written.
        """
        seeded = False
        if self._seed_on_first_run:
            try:
                seeded = self._repository.seed_if_empty(self._now())
            except RepositoryError as exc:
                raise PromptStorageError("Failed to seed the prompt library") from exc
        self.refresh()
        return seeded

    def refresh(self) -> None:
        """Reload both collections from the repository."""
        try:
            prompts = self._repository.list_prompts()
            categories = self._repository.list_categories()
        except RepositoryError as exc:
            raise PromptStorageError("Failed to load the prompt library") from exc
        self._prompts = prompts
        self._categories = categories
        logger.debug(
            "Prompt library refreshed",
            extra={"prompts": len(prompts), "categories": len(categories)},
        )

    def category_tree(self) -> CategoryTree:
        """Return a tree index over the cached categories."""
        return CategoryTree(self._categories)

    def reset_all_data(self) -> None:
        """Delete every prompt and category."""
        try:
            self._repository.reset_all_data()
        except RepositoryError as exc:
            raise PromptStorageError("Failed to reset the prompt library") from exc
        self.refresh()

    def close(self) -> None:
        """Drop cached state; connections are opened per operation."""
        if self._closed:
            return
        self._prompts = []
        self._categories = []
        self._closed = True

    def __enter__(self) -> PromptManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

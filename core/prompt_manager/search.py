"""Scoped search helpers for Prompt Manager.

Updates:
  v0.1.0 - 2026-10-07 - Route sidebar views and free-text search through the query engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..query import QueryScope, query_prompts

if TYPE_CHECKING:
    from models.category_model import Category
    from models.prompt_model import Prompt

__all__ = ["PromptSearchMixin"]


class PromptSearchMixin:
    """Query the cached library by scope and search text."""

    _prompts: list[Prompt]
    _categories: list[Category]
    _recent_limit: int

    def query(
        self,
        scope: QueryScope | str | None = None,
        search_text: str | None = None,
    ) -> list[Prompt]:
        """Return prompts matching *scope* and *search_text*, newest first.

        *scope* may be a :class:`QueryScope` or a view string such as
        ``"favorites"``, ``"recent"``, or a category id.
        """
        if scope is None or isinstance(scope, str):
            scope = QueryScope.parse(scope, recent_limit=self._recent_limit)
        return query_prompts(self._prompts, self._categories, scope, search_text)

    def favorites(self) -> list[Prompt]:
        return self.query(QueryScope.favorites())

    def recent_prompts(self) -> list[Prompt]:
        return self.query(QueryScope.recent(self._recent_limit))

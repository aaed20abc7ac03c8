"""Query engine composing scope and free-text filters over prompt snapshots.

Queries are pure: they operate on the prompt and category sequences supplied by
the caller and never touch the repository.

Updates:
  v0.2.1 - 2026-10-18 - Route free-text filtering through matches_search.
  v0.2.0 - 2026-10-14 - Parse sidebar view filter strings into scopes.
  v0.1.0 - 2026-10-06 - Introduce scoped, case-insensitive prompt filtering.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .category_tree import CategoryTree

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from models.category_model import Category
    from models.prompt_model import Prompt

__all__ = [
    "DEFAULT_RECENT_LIMIT",
    "QueryScope",
    "ScopeKind",
    "matches_search",
    "order_by_recency",
    "query_prompts",
]

DEFAULT_RECENT_LIMIT = 50


class ScopeKind(str, Enum):
    """Enumerate the supported query selectors."""

    ALL = "all"
    FAVORITES = "favorites"
    RECENT = "recent"
    CATEGORY = "category"


@dataclass(slots=True, frozen=True)
class QueryScope:
    """Selector applied before text search."""

    kind: ScopeKind
    limit: int | None = None
    category_id: str | None = None

    def __post_init__(self) -> None:
        if self.kind is ScopeKind.RECENT:
            if self.limit is None or self.limit < 0:
                raise ValueError("recent scope requires a non-negative limit")
        if self.kind is ScopeKind.CATEGORY and not self.category_id:
            raise ValueError("category scope requires a category id")

    @classmethod
    def all_prompts(cls) -> QueryScope:
        return cls(ScopeKind.ALL)

    @classmethod
    def favorites(cls) -> QueryScope:
        return cls(ScopeKind.FAVORITES)

    @classmethod
    def recent(cls, limit: int = DEFAULT_RECENT_LIMIT) -> QueryScope:
        return cls(ScopeKind.RECENT, limit=limit)

    @classmethod
    def category(cls, category_id: str) -> QueryScope:
        return cls(ScopeKind.CATEGORY, category_id=category_id)

    @classmethod
    def parse(cls, value: str | None, *, recent_limit: int = DEFAULT_RECENT_LIMIT) -> QueryScope:
        """Map a view filter string (``all``, ``favorites``, ``recent``, or a category id)."""
        text = (value or "").strip()
        lowered = text.lower()
        if not text or lowered == ScopeKind.ALL.value:
            return cls.all_prompts()
        if lowered == ScopeKind.FAVORITES.value:
            return cls.favorites()
        if lowered == ScopeKind.RECENT.value:
            return cls.recent(recent_limit)
        return cls.category(text)

    def describe(self) -> str:
        """Return a short human-readable label."""
        if self.kind is ScopeKind.RECENT:
            return f"recent {self.limit}"
        if self.kind is ScopeKind.CATEGORY:
            return f"category {self.category_id}"
        return self.kind.value


def order_by_recency(prompts: Iterable[Prompt]) -> list[Prompt]:
    """Return prompts ordered by ``updated_at`` descending; ties keep input order."""
    return sorted(prompts, key=lambda prompt: prompt.updated_at, reverse=True)


def matches_search(prompt: Prompt, search_text: str | None) -> bool:
    """Return True when *search_text* is blank or occurs in title, content, or a tag."""
    if search_text is None or not search_text.strip():
        return True
    return prompt.matches_text(search_text.lower())


def query_prompts(
    prompts: Iterable[Prompt],
    categories: Iterable[Category],
    scope: QueryScope | None = None,
    search_text: str | None = None,
) -> list[Prompt]:
    """Return prompts selected by *scope* and *search_text*, most recently updated first.

    Filtering never reorders: the recency ordering established up front is kept.
    A prompt without a category never matches a category scope.
    """
    scope = scope or QueryScope.all_prompts()
    result: Sequence[Prompt] = order_by_recency(prompts)

    if scope.kind is ScopeKind.FAVORITES:
        result = [prompt for prompt in result if prompt.is_favorite]
    elif scope.kind is ScopeKind.RECENT:
        result = result[: scope.limit]
    elif scope.kind is ScopeKind.CATEGORY:
        assert scope.category_id is not None  # enforced by QueryScope
        relevant_ids = CategoryTree(categories).subtree_ids(scope.category_id)
        result = [
            prompt
            for prompt in result
            if prompt.category_id is not None and prompt.category_id in relevant_ids
        ]

    if search_text is not None and search_text.strip():
        result = [prompt for prompt in result if matches_search(prompt, search_text)]

    return list(result)

"""Category tree index derived from the flat category collection.

The index is rebuilt from a snapshot every time it is needed; the stored
category rows remain the only source of truth.

Updates:
  v0.2.0 - 2026-10-15 - Add ancestor walk and cycle detection for reparenting.
  v0.1.0 - 2026-10-06 - Introduce parent-to-children adjacency and subtree lookups.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from models.category_model import Category

logger = logging.getLogger(__name__)

__all__ = ["CategoryTree", "subtree_ids"]


class CategoryTree:
    """Parent-to-children adjacency over a snapshot of categories.

    Categories whose ``parent_id`` references a missing category are treated as
    roots. Every traversal tracks visited ids so an accidental cycle in stored
    data terminates instead of looping.
    """

    def __init__(self, categories: Iterable[Category]) -> None:
        self._by_id: dict[str, Category] = {}
        for category in categories:
            self._by_id[category.id] = category
        self._children: dict[str | None, list[Category]] = defaultdict(list)
        for category in self._by_id.values():
            self._children[self._effective_parent(category)].append(category)

    def _effective_parent(self, category: Category) -> str | None:
        parent_id = category.parent_id
        if parent_id is None or parent_id not in self._by_id:
            return None
        return parent_id

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, category_id: str | None) -> Category | None:
        """Return the category for *category_id* when present in the snapshot."""
        if category_id is None:
            return None
        return self._by_id.get(category_id)

    def roots(self) -> list[Category]:
        """Return root categories, including those with a dangling parent."""
        return list(self._children.get(None, []))

    def children(self, category_id: str) -> list[Category]:
        """Return the direct children of *category_id*."""
        if category_id not in self._by_id:
            return []
        return list(self._children.get(category_id, []))

    def subtree_ids(self, category_id: str) -> set[str]:
        """Return *category_id* plus the ids of all of its descendants.

        The starting id is always included, even when it is not present in the
        snapshot, so prompts still pointing at a just-deleted category match.
        """
        visited: set[str] = set()
        stack = [category_id]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            for child in self._children.get(current, []):
                if child.id in visited:
                    logger.warning("Category cycle detected", extra={"category_id": child.id})
                    continue
                stack.append(child.id)
        return visited

    def ancestors(self, category_id: str) -> list[Category]:
        """Return the parent chain of *category_id*, nearest first."""
        chain: list[Category] = []
        seen: set[str] = {category_id}
        current = self._by_id.get(category_id)
        while current is not None:
            parent_id = self._effective_parent(current)
            if parent_id is None or parent_id in seen:
                break
            seen.add(parent_id)
            current = self._by_id[parent_id]
            chain.append(current)
        return chain

    def path(self, category_id: str) -> list[Category]:
        """Return the categories from the root down to *category_id*."""
        category = self._by_id.get(category_id)
        if category is None:
            return []
        return [*reversed(self.ancestors(category_id)), category]

    def would_create_cycle(self, category_id: str, new_parent_id: str | None) -> bool:
        """Return True when making *new_parent_id* the parent of *category_id* loops."""
        if new_parent_id is None:
            return False
        return new_parent_id in self.subtree_ids(category_id)

    def walk(self) -> Iterator[tuple[Category, int]]:
        """Yield ``(category, depth)`` pairs in depth-first display order."""
        visited: set[str] = set()
        stack: list[tuple[Category, int]] = [(root, 0) for root in reversed(self.roots())]
        while stack:
            category, depth = stack.pop()
            if category.id in visited:
                continue
            visited.add(category.id)
            yield category, depth
            for child in reversed(self._children.get(category.id, [])):
                stack.append((child, depth + 1))
        # Members of a parent cycle are unreachable from any root.
        for category in self._by_id.values():
            if category.id not in visited:
                visited.add(category.id)
                yield category, 0


def subtree_ids(categories: Iterable[Category], category_id: str) -> set[str]:
    """Return the subtree ids of *category_id* within *categories*."""
    return CategoryTree(categories).subtree_ids(category_id)

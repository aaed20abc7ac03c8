"""Category metadata models and helpers.

Updates:
  v0.2.0 - 2026-10-12 - Switch categories to id/name/parent_id records for the tree index.
  v0.1.0 - 2026-10-05 - Introduce Category dataclass and helpers.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_CATEGORY_ICON = "folder"
DEFAULT_CATEGORY_COLOR = "gray"


def _clean_optional_text(value: Any) -> Optional[str]:
    """Strip whitespace from optional string inputs."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(slots=True)
class Category:
    """Named node of the category tree.

    ``parent_id`` may reference a category that no longer exists; such nodes are
    treated as roots by :class:`core.category_tree.CategoryTree`.
    """

    id: str
    name: str
    parent_id: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalise text fields."""

        self.id = str(self.id).strip()
        self.name = (self.name or "").strip()
        self.parent_id = _clean_optional_text(self.parent_id)
        self.icon = _clean_optional_text(self.icon)
        self.color = _clean_optional_text(self.color)

    @classmethod
    def create(
        cls,
        name: str,
        parent_id: Optional[str] = None,
        *,
        icon: Optional[str] = DEFAULT_CATEGORY_ICON,
        color: Optional[str] = DEFAULT_CATEGORY_COLOR,
    ) -> "Category":
        """Return a new category with a freshly generated identifier."""

        return cls(id=str(uuid.uuid4()), name=name, parent_id=parent_id, icon=icon, color=color)

    def validate(self) -> None:
        """Raise ValueError when the record cannot be stored."""

        if not self.id:
            raise ValueError("Category id cannot be empty.")
        if not self.name:
            raise ValueError("Category name cannot be empty.")
        if self.parent_id is not None and self.parent_id == self.id:
            raise ValueError("A category cannot be its own parent.")

    @property
    def is_root(self) -> bool:
        """Return True when the category declares no parent."""
        return self.parent_id is None

    def to_record(self) -> dict[str, Any]:
        """Serialize the category into a plain dictionary."""

        return {
            "id": self.id,
            "name": self.name,
            "parent_id": self.parent_id,
            "icon": self.icon,
            "color": self.color,
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "Category":
        """Hydrate a Category from a mapping."""

        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            parent_id=_clean_optional_text(data.get("parent_id")),
            icon=_clean_optional_text(data.get("icon")),
            color=_clean_optional_text(data.get("color")),
        )


__all__ = [
    "Category",
    "DEFAULT_CATEGORY_COLOR",
    "DEFAULT_CATEGORY_ICON",
]

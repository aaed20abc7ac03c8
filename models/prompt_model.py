"""Prompt data model definitions.

Updates: v0.3.0 - 2026-10-14 - Add merge-and-touch and usage increment helpers.
Updates: v0.2.0 - 2026-10-12 - Track favourites, usage counters, and last-used timestamps.
Updates: v0.1.0 - 2026-10-05 - Initial Prompt schema with serialization helpers.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any


def _utc_now() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(UTC)


def _ensure_datetime(value: Any) -> datetime:
    """Parse incoming datetime values (isoformat strings, epoch millis, or datetime)."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if value is None:
        return _utc_now()
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    parsed = datetime.fromisoformat(str(value))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _optional_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    return _ensure_datetime(value)


def normalize_tags(items: Iterable[Any] | str | None) -> list[str]:
    """Return trimmed, non-blank tags preserving order and duplicates.

    Strings are treated as comma separated input, matching the editor form.
    """
    if items is None:
        return []
    if isinstance(items, str):
        items = items.split(",")
    tags: list[str] = []
    for raw in items:
        text = str(raw).strip()
        if text:
            tags.append(text)
    return tags


@dataclass(slots=True)
class Prompt:
    """Dataclass representation of a stored prompt."""

    id: str
    title: str
    content: str
    category_id: str | None = None
    tags: list[str] = field(default_factory=list)
    is_favorite: bool = False
    usage_count: int = 0
    last_used_at: datetime | None = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Normalise identifiers, tags, and timestamps."""
        self.id = str(self.id).strip()
        category_id = str(self.category_id).strip() if self.category_id is not None else ""
        self.category_id = category_id or None
        self.tags = normalize_tags(self.tags)
        self.is_favorite = bool(self.is_favorite)
        self.usage_count = max(int(self.usage_count or 0), 0)
        self.created_at = _ensure_datetime(self.created_at)
        self.updated_at = _ensure_datetime(self.updated_at)
        self.last_used_at = _optional_datetime(self.last_used_at)

    @classmethod
    def create(
        cls,
        title: str,
        content: str,
        *,
        category_id: str | None = None,
        tags: Iterable[Any] | str | None = None,
        is_favorite: bool = False,
        usage_count: int = 0,
        now: datetime | None = None,
    ) -> Prompt:
        """Return a new prompt with a fresh id and both timestamps set to *now*."""
        timestamp = now or _utc_now()
        return cls(
            id=str(uuid.uuid4()),
            title=title,
            content=content,
            category_id=category_id,
            tags=normalize_tags(tags),
            is_favorite=is_favorite,
            usage_count=usage_count,
            created_at=timestamp,
            updated_at=timestamp,
        )

    def validate(self) -> None:
        """Raise ValueError when the prompt cannot be stored."""
        if not self.id:
            raise ValueError("Prompt id cannot be empty.")
        if not self.title.strip():
            raise ValueError("Prompt title cannot be empty.")
        if not self.content.strip():
            raise ValueError("Prompt content cannot be empty.")

    def touched(self, now: datetime | None = None, **changes: Any) -> Prompt:
        """Return a copy with *changes* merged and ``updated_at`` refreshed.

        ``updated_at`` never moves behind ``created_at``.
        """
        changes.pop("id", None)
        changes.pop("created_at", None)
        changes.pop("updated_at", None)
        timestamp = now or _utc_now()
        if timestamp < self.created_at:
            timestamp = self.created_at
        return replace(self, **changes, updated_at=timestamp)

    def with_usage(self, now: datetime | None = None) -> Prompt:
        """Return a copy recording one more copy event."""
        timestamp = now or _utc_now()
        return self.touched(
            timestamp,
            usage_count=self.usage_count + 1,
            last_used_at=timestamp,
        )

    def matches_text(self, needle: str) -> bool:
        """Return True when lowercased *needle* occurs in title, content, or a tag."""
        if needle in self.title.lower() or needle in self.content.lower():
            return True
        return any(needle in tag.lower() for tag in self.tags)

    def to_record(self) -> dict[str, Any]:
        """Serialize the prompt into a JSON-compatible mapping."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "category_id": self.category_id,
            "tags": list(self.tags),
            "is_favorite": self.is_favorite,
            "usage_count": self.usage_count,
            "last_used_at": self.last_used_at.isoformat() if self.last_used_at else None,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Prompt:
        """Hydrate a Prompt from a mapping produced by :meth:`to_record`."""
        tags_value = data.get("tags")
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            category_id=data.get("category_id"),
            tags=list(tags_value) if isinstance(tags_value, (list, tuple)) else [],
            is_favorite=bool(data.get("is_favorite", False)),
            usage_count=int(data.get("usage_count") or 0),
            last_used_at=data.get("last_used_at"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


__all__ = ["Prompt", "normalize_tags"]

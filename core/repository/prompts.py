"""Prompt persistence helpers.

Updates:
  v0.3.0 - 2026-10-18 - Share row writes with batch callers; warn on unreadable timestamps.
  v0.2.0 - 2026-10-14 - Order prompt listings by most recently updated in Python.
  v0.1.0 - 2026-10-05 - Extract prompt put/list/delete helpers into mixin.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Any, ClassVar

from models.prompt_model import Prompt

from .base import (
    RepositoryError,
    format_datetime as _format_datetime,
    json_dumps as _json_dumps,
    json_loads_list as _json_loads_list,
    logger,
    parse_optional_datetime as _parse_optional_datetime,
    session as _session,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class PromptStoreMixin:
    """Insert-or-replace, listing, and deletion of prompt rows."""

    _db_path: Path

    _COLUMNS: ClassVar[Sequence[str]] = (
        "id",
        "title",
        "content",
        "category_id",
        "tags",
        "is_favorite",
        "usage_count",
        "last_used_at",
        "created_at",
        "updated_at",
    )

    def put_prompt(self, prompt: Prompt) -> Prompt:
        """Insert or replace a prompt row wholesale."""
        try:
            with _session(self._db_path) as conn:
                self._write_prompt(conn, prompt)
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to save prompt {prompt.id}") from exc
        logger.debug("Prompt saved", extra={"prompt_id": prompt.id})
        return prompt

    def get_prompt(self, prompt_id: str) -> Prompt | None:
        """Return the prompt stored under *prompt_id* or None when absent."""
        try:
            with _session(self._db_path) as conn:
                row = conn.execute(
                    "SELECT * FROM prompts WHERE id = ?;",
                    (str(prompt_id),),
                ).fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to load prompt {prompt_id}") from exc
        if row is None:
            return None
        return self._row_to_prompt(row)

    def list_prompts(self) -> list[Prompt]:
        """Return every prompt ordered by ``updated_at`` descending."""
        try:
            with _session(self._db_path) as conn:
                rows = conn.execute("SELECT * FROM prompts;").fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to fetch prompt list") from exc
        prompts = [self._row_to_prompt(row) for row in rows]
        prompts.sort(key=lambda prompt: prompt.updated_at, reverse=True)
        return prompts

    def delete_prompt(self, prompt_id: str) -> None:
        """Delete a prompt by id; deleting a missing id is a no-op."""
        try:
            with _session(self._db_path) as conn:
                cursor = conn.execute("DELETE FROM prompts WHERE id = ?;", (str(prompt_id),))
                removed = cursor.rowcount
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete prompt {prompt_id}") from exc
        if removed == 0:
            logger.debug("Prompt delete skipped; id not present", extra={"prompt_id": prompt_id})

    # Row mapping -------------------------------------------------------- #

    def _write_prompt(self, conn: sqlite3.Connection, prompt: Prompt) -> None:
        """Insert or replace *prompt* using an open connection."""
        placeholders = ", ".join(f":{column}" for column in self._COLUMNS)
        conn.execute(
            f"INSERT OR REPLACE INTO prompts ({', '.join(self._COLUMNS)}) "
            f"VALUES ({placeholders});",
            self._prompt_to_row(prompt),
        )

    def _prompt_to_row(self, prompt: Prompt) -> dict[str, Any]:
        return {
            "id": prompt.id,
            "title": prompt.title,
            "content": prompt.content,
            "category_id": prompt.category_id,
            "tags": _json_dumps(list(prompt.tags)),
            "is_favorite": int(prompt.is_favorite),
            "usage_count": int(prompt.usage_count),
            "last_used_at": _format_datetime(prompt.last_used_at),
            "created_at": _format_datetime(prompt.created_at),
            "updated_at": _format_datetime(prompt.updated_at),
        }

    def _row_to_prompt(self, row: sqlite3.Row) -> Prompt:
        for column in ("created_at", "updated_at"):
            if _parse_optional_datetime(row[column]) is None:
                logger.warning(
                    "Stored prompt timestamp is unreadable; substituting the current time",
                    extra={"prompt_id": row["id"], "column": column, "value": row[column]},
                )
        return Prompt(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            category_id=row["category_id"],
            tags=_json_loads_list(row["tags"]),
            is_favorite=bool(row["is_favorite"]),
            usage_count=int(row["usage_count"] or 0),
            last_used_at=_parse_optional_datetime(row["last_used_at"]),
            created_at=_parse_optional_datetime(row["created_at"]),
            updated_at=_parse_optional_datetime(row["updated_at"]),
        )


__all__ = ["PromptStoreMixin"]

"""Category persistence helpers including the uncategorise cascade.

Updates:
  v0.3.0 - 2026-10-18 - Upsert category rows in place to keep insertion order on edits.
  v0.2.0 - 2026-10-15 - Run the category delete cascade inside a single transaction.
  v0.1.0 - 2026-10-05 - Extract category put/list/delete helpers into mixin.
"""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from models.category_model import Category

from .base import (
    RepositoryError,
    format_datetime as _format_datetime,
    logger,
    session as _session,
)

if TYPE_CHECKING:
    from pathlib import Path


class CategoryStoreMixin:
    """Insert-or-replace, listing, and cascade deletion of category rows."""

    _db_path: Path

    def put_category(self, category: Category) -> Category:
        """Insert a category row or overwrite every field of the stored one."""
        try:
            with _session(self._db_path) as conn:
                self._write_category(conn, category)
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to save category {category.id}") from exc
        return category

    def get_category(self, category_id: str) -> Category | None:
        """Return the category stored under *category_id* or None when absent."""
        try:
            with _session(self._db_path) as conn:
                row = conn.execute(
                    "SELECT * FROM categories WHERE id = ?;",
                    (str(category_id),),
                ).fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to load category {category_id}") from exc
        if row is None:
            return None
        return Category.from_record(dict(row))

    def list_categories(self) -> list[Category]:
        """Return all stored categories in insertion order."""
        try:
            with _session(self._db_path) as conn:
                rows = conn.execute("SELECT * FROM categories ORDER BY rowid;").fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to list categories") from exc
        return [Category.from_record(dict(row)) for row in rows]

    def delete_category(self, category_id: str) -> None:
        """Delete a category row only; deleting a missing id is a no-op.

        Prompts and child categories are left untouched. Use
        :meth:`uncategorize_and_delete_category` for the full cascade.
        """
        try:
            with _session(self._db_path) as conn:
                conn.execute("DELETE FROM categories WHERE id = ?;", (str(category_id),))
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete category {category_id}") from exc

    def _write_category(self, conn: sqlite3.Connection, category: Category) -> None:
        """Upsert *category* in place so its listing position survives edits."""
        conn.execute(
            """
            INSERT INTO categories (id, name, parent_id, icon, color)
            VALUES (:id, :name, :parent_id, :icon, :color)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                parent_id = excluded.parent_id,
                icon = excluded.icon,
                color = excluded.color;
            """,
            category.to_record(),
        )

    def uncategorize_and_delete_category(
        self,
        category_id: str,
        *,
        now: datetime | None = None,
    ) -> int:
        """Clear ``category_id`` on referencing prompts, then delete the category.

        Both steps share one transaction. Child categories keep their dangling
        ``parent_id``. Returns the number of prompts that were uncategorised.
        """
        timestamp = _format_datetime(now or datetime.now(UTC))
        try:
            with _session(self._db_path) as conn:
                cursor = conn.execute(
                    """
                    UPDATE prompts
                    SET category_id = NULL,
                        updated_at = CASE WHEN created_at > :now THEN created_at ELSE :now END
                    WHERE category_id = :category_id;
                    """,
                    {"category_id": str(category_id), "now": timestamp},
                )
                affected = cursor.rowcount
                conn.execute("DELETE FROM categories WHERE id = ?;", (str(category_id),))
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete category {category_id}") from exc
        logger.info(
            "Category deleted",
            extra={"category_id": category_id, "uncategorized_prompts": affected},
        )
        return affected


__all__ = ["CategoryStoreMixin"]

"""Schema bootstrap, first-run seeding, and maintenance helpers for the repository.

Updates:
  v0.2.0 - 2026-10-13 - Seed starter categories and sample prompts on first run.
  v0.1.0 - 2026-10-05 - Extract schema management and reset helpers.
"""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from models.category_model import Category
from models.prompt_model import Prompt

from .base import RepositoryError, session as _session

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from pathlib import Path


SEED_CATEGORIES: tuple[Category, ...] = (
    Category(id="marketing", name="Marketing", icon="megaphone", color="blue"),
    Category(
        id="social-media",
        name="Social Media",
        parent_id="marketing",
        icon="share",
        color="indigo",
    ),
    Category(id="seo", name="SEO", parent_id="marketing", icon="search", color="green"),
    Category(id="coding", name="Coding", icon="code", color="slate"),
    Category(id="react", name="React", parent_id="coding", icon="atom", color="cyan"),
    Category(id="writing", name="Creative Writing", icon="pen-tool", color="purple"),
)


def build_seed_prompts(now: datetime | None = None) -> list[Prompt]:
    """Return the sample prompts stored on first run."""
    timestamp = now or datetime.now(UTC)
    return [
        Prompt(
            id="p1",
            title="Blog Post Generator",
            content=(
                "Write a comprehensive blog post about [TOPIC]. structure it with an engaging "
                "introduction, 3 main points with examples, and a conclusion with a call to "
                "action. Tone: Professional yet accessible."
            ),
            category_id="social-media",
            tags=["blog", "content"],
            is_favorite=True,
            usage_count=0,
            created_at=timestamp,
            updated_at=timestamp,
        ),
        Prompt(
            id="p2",
            title="React Component Specialist",
            content=(
                "Act as a Senior React Engineer. Create a functional component for "
                "[COMPONENT_NAME] using TypeScript and Tailwind CSS. Ensure accessibility "
                "(a11y) and handle loading/error states."
            ),
            category_id="react",
            tags=["dev", "frontend"],
            is_favorite=False,
            usage_count=5,
            created_at=timestamp,
            updated_at=timestamp,
        ),
    ]


class RepositoryMaintenanceMixin:
    """Tasks that create and reset repository storage."""

    _db_path: Path

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        """Create required tables if they do not exist.

        No foreign keys are declared: prompts may reference a deleted category and
        categories may reference a deleted parent.
        """
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS prompts (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                category_id TEXT,
                tags TEXT,
                is_favorite INTEGER NOT NULL DEFAULT 0,
                usage_count INTEGER NOT NULL DEFAULT 0,
                last_used_at TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_prompts_category ON prompts(category_id);")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_prompts_favorite ON prompts(is_favorite);")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_prompts_updated ON prompts(updated_at);")
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS categories (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                parent_id TEXT,
                icon TEXT,
                color TEXT
            );
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_categories_parent ON categories(parent_id);"
        )

    def reset_all_data(self) -> None:
        """Clear all persisted prompts and categories."""
        try:
            with _session(self._db_path) as conn:
                conn.execute("DELETE FROM prompts;")
                conn.execute("DELETE FROM categories;")
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to reset repository data") from exc


__all__ = ["RepositoryMaintenanceMixin", "SEED_CATEGORIES", "build_seed_prompts"]

"""SQLite-backed repository for persistent prompt and category storage.

Updates:
  v0.4.0 - 2026-10-18 - Seed the starter catalogue in a single transaction.
  v0.3.0 - 2026-10-15 - Add transactional category delete cascade.
  v0.2.0 - 2026-10-13 - Add collection-generic put/get_all/delete and first-run seeding.
  v0.1.0 - 2026-10-05 - Compose repository from prompt/category/maintenance mixins.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from models.category_model import Category
from models.prompt_model import Prompt

from .base import (
    Collection,
    RepositoryError,
    connect as _connect,
    ensure_directory as _ensure_directory,
    json_dumps as _json_dumps,
    json_loads_list as _json_loads_list,
    logger,
    parse_optional_datetime as _parse_optional_datetime,
    session as _session,
)
from .categories import CategoryStoreMixin
from .maintenance import SEED_CATEGORIES, RepositoryMaintenanceMixin, build_seed_prompts
from .prompts import PromptStoreMixin

Record = Prompt | Category


class PromptRepository(
    RepositoryMaintenanceMixin,
    PromptStoreMixin,
    CategoryStoreMixin,
):
    """Compose repository mixins for SQLite-backed storage."""

    def __init__(self, db_path: str | Path) -> None:
        """Initialise repository storage and ensure the schema exists."""
        self._db_path = Path(db_path)
        try:
            _ensure_directory(self._db_path)
            with _session(self._db_path) as conn:
                self._ensure_schema(conn)
        except (OSError, sqlite3.Error) as exc:
            raise RepositoryError(f"Failed to initialise SQLite storage at {db_path}") from exc

    @property
    def db_path(self) -> Path:
        """Return the SQLite database location."""
        return self._db_path

    # Collection-generic contract ----------------------------------------- #

    def put(self, record: Record) -> None:
        """Insert or replace *record* in the collection matching its type."""
        if isinstance(record, Prompt):
            self.put_prompt(record)
        elif isinstance(record, Category):
            self.put_category(record)
        else:
            raise TypeError(f"Unsupported record type: {type(record).__name__}")

    def get_all(self, collection: Collection | str) -> list[Prompt] | list[Category]:
        """Return every record stored in *collection*."""
        if Collection(collection) is Collection.PROMPTS:
            return self.list_prompts()
        return self.list_categories()

    def delete(self, collection: Collection | str, record_id: str) -> None:
        """Remove *record_id* from *collection*; missing ids are ignored."""
        if Collection(collection) is Collection.PROMPTS:
            self.delete_prompt(record_id)
        else:
            self.delete_category(record_id)

    # First-run seeding ---------------------------------------------------- #

    def seed_if_empty(self, now: datetime | None = None) -> bool:
        """Store the starter catalogue when no categories exist yet.

        All seed rows are written in one transaction, so a failed attempt leaves
        the store empty and the next call seeds again. Returns True when seed
        data was written.
        """
        if self.list_categories():
            return False
        prompts = build_seed_prompts(now)
        try:
            with _session(self._db_path) as conn:
                for category in SEED_CATEGORIES:
                    self._write_category(conn, category)
                for prompt in prompts:
                    self._write_prompt(conn, prompt)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to seed starter catalogue") from exc
        logger.info(
            "Seeded starter catalogue",
            extra={"categories": len(SEED_CATEGORIES), "prompts": len(prompts)},
        )
        return True


__all__ = [
    "Collection",
    "PromptRepository",
    "Record",
    "RepositoryError",
    "_connect",
    "_json_dumps",
    "_json_loads_list",
    "_parse_optional_datetime",
]

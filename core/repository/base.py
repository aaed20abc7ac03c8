"""Shared repository helpers, collection names, and error hierarchy.

Updates:
  v0.2.0 - 2026-10-12 - Add session helper that closes connections after each unit of work.
  v0.1.0 - 2026-10-05 - Extract logger, helpers, and exceptions for the SQLite store.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

logger = logging.getLogger("promptmind.repository")


class Collection(str, Enum):
    """Independent record namespaces managed by the repository."""

    PROMPTS = "prompts"
    CATEGORIES = "categories"


class RepositoryError(Exception):
    """Raised when the SQLite backend cannot complete an operation."""


def ensure_directory(path: Path) -> None:
    """Ensure the directory for the SQLite database exists."""
    path.parent.mkdir(parents=True, exist_ok=True)


def connect(db_path: Path) -> sqlite3.Connection:
    """Return a configured SQLite connection."""
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode = WAL;")
    conn.execute("PRAGMA synchronous = NORMAL;")
    return conn


@contextmanager
def session(db_path: Path) -> Iterator[sqlite3.Connection]:
    """Yield a connection wrapped in a transaction and close it afterwards.

    The transaction commits when the block exits cleanly and rolls back when it
    raises, so multi-statement writes inside one block are all-or-nothing.
    """
    conn = connect(db_path)
    try:
        with conn:
            yield conn
    finally:
        conn.close()


def json_dumps(value: Any | None) -> str | None:
    """Serialize arbitrary values to JSON strings (or None)."""
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)


def json_loads_list(value: str | None) -> list[str]:
    """Deserialize JSON-encoded lists stored in SQLite into Python lists."""
    if value is None:
        return []
    if value in ("", "null"):
        return []
    try:
        parsed: object = json.loads(value)
    except json.JSONDecodeError:
        return [str(value)]  # degraded fallback
    if isinstance(parsed, list):
        entries = cast("Sequence[object]", parsed)
        return [str(item) for item in entries]
    return [str(parsed)]


def format_datetime(value: datetime | None) -> str | None:
    """Return a UTC ISO-8601 string with fixed microsecond precision."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def parse_optional_datetime(value: Any) -> datetime | None:
    """Return a timezone-aware datetime parsed from SQLite rows when possible."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed
    return None


__all__ = [
    "Collection",
    "RepositoryError",
    "connect",
    "ensure_directory",
    "format_datetime",
    "json_dumps",
    "json_loads_list",
    "logger",
    "parse_optional_datetime",
    "session",
]

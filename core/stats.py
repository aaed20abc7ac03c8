"""Read-only summary metrics derived from a prompt and category snapshot.

Updates:
  v0.2.0 - 2026-10-16 - Isolate each derivation so one failure cannot blank the dashboard.
  v0.1.0 - 2026-10-07 - Introduce totals, most-used, category share, and tag frequency metrics.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from models.category_model import Category
    from models.prompt_model import Prompt

logger = logging.getLogger(__name__)

__all__ = [
    "CategoryShare",
    "StatsSnapshot",
    "TagCount",
    "UNCATEGORIZED_LABEL",
    "category_distribution",
    "most_used_prompts",
    "rank_tags",
    "summarize",
]

UNCATEGORIZED_LABEL = "Uncategorized"
UNCATEGORIZED_COLOR = "gray"
DEFAULT_TOP_PROMPTS = 5
DEFAULT_TOP_TAGS = 8

_T = TypeVar("_T")


@dataclass(slots=True, frozen=True)
class CategoryShare:
    """Prompt count and share of the library for one category bucket."""

    category_id: str | None
    name: str
    color: str | None
    count: int
    percentage: int


@dataclass(slots=True, frozen=True)
class TagCount:
    """Normalised tag with its frequency across prompts."""

    tag: str
    count: int


@dataclass(slots=True)
class StatsSnapshot:
    """Aggregate metrics for the statistics dashboard."""

    total_prompts: int = 0
    total_favorites: int = 0
    total_usage: int = 0
    most_used: list[Prompt] = field(default_factory=list)
    category_distribution: list[CategoryShare] = field(default_factory=list)
    top_tags: list[TagCount] = field(default_factory=list)


def most_used_prompts(prompts: Sequence[Prompt], limit: int = DEFAULT_TOP_PROMPTS) -> list[Prompt]:
    """Return up to *limit* prompts by usage; ties keep input order, unused prompts excluded."""
    if limit <= 0:
        return []
    ranked = sorted(prompts, key=lambda prompt: prompt.usage_count, reverse=True)
    return [prompt for prompt in ranked[:limit] if prompt.usage_count > 0]


def _rounded_percentages(counts: Sequence[int], total: int) -> list[int]:
    """Round each share half-up, then trim overshoot so the sum never exceeds 100."""
    if total <= 0:
        return [0 for _ in counts]
    raw = [count * 100 / total for count in counts]
    rounded = [math.floor(value + 0.5) for value in raw]
    excess = sum(rounded) - 100
    if excess > 0:
        # Take the point back from buckets that were rounded up the most.
        order = sorted(range(len(raw)), key=lambda index: rounded[index] - raw[index], reverse=True)
        for index in order[:excess]:
            rounded[index] -= 1
    return rounded


def category_distribution(
    prompts: Sequence[Prompt],
    categories: Sequence[Category],
) -> list[CategoryShare]:
    """Return prompt counts per category, largest first.

    Prompts without a category, or pointing at a category that no longer
    exists, are counted in a single Uncategorized bucket.
    """
    known = {category.id: category for category in categories}
    counts: Counter[str | None] = Counter()
    for prompt in prompts:
        key = prompt.category_id if prompt.category_id in known else None
        counts[key] += 1
    if not counts:
        return []

    ordered = counts.most_common()
    percentages = _rounded_percentages([count for _, count in ordered], len(prompts))
    shares: list[CategoryShare] = []
    for (category_id, count), percentage in zip(ordered, percentages, strict=True):
        category = known.get(category_id) if category_id is not None else None
        shares.append(
            CategoryShare(
                category_id=category_id,
                name=category.name if category else UNCATEGORIZED_LABEL,
                color=category.color if category else UNCATEGORIZED_COLOR,
                count=count,
                percentage=percentage,
            )
        )
    return shares


def rank_tags(prompts: Sequence[Prompt], limit: int = DEFAULT_TOP_TAGS) -> list[TagCount]:
    """Return the *limit* most frequent tags after lowercasing and trimming."""
    if limit <= 0:
        return []
    counts: Counter[str] = Counter()
    for prompt in prompts:
        for tag in prompt.tags:
            clean = tag.strip().lower()
            if clean:
                counts[clean] += 1
    return [TagCount(tag=tag, count=count) for tag, count in counts.most_common(limit)]


def _isolated(label: str, derive: Callable[[], _T], default: _T) -> _T:
    try:
        return derive()
    except Exception:  # noqa: BLE001 - one metric must not blank the others
        logger.exception("Statistics derivation failed", extra={"metric": label})
        return default


def summarize(
    prompts: Sequence[Prompt],
    categories: Sequence[Category],
    *,
    top_prompts: int = DEFAULT_TOP_PROMPTS,
    top_tags: int = DEFAULT_TOP_TAGS,
) -> StatsSnapshot:
    """Return a :class:`StatsSnapshot` for the supplied records."""
    prompts = list(prompts)
    categories = list(categories)
    return StatsSnapshot(
        total_prompts=len(prompts),
        total_favorites=_isolated(
            "total_favorites",
            lambda: sum(1 for prompt in prompts if prompt.is_favorite),
            0,
        ),
        total_usage=_isolated(
            "total_usage",
            lambda: sum(prompt.usage_count for prompt in prompts),
            0,
        ),
        most_used=_isolated("most_used", lambda: most_used_prompts(prompts, top_prompts), []),
        category_distribution=_isolated(
            "category_distribution",
            lambda: category_distribution(prompts, categories),
            [],
        ),
        top_tags=_isolated("top_tags", lambda: rank_tags(prompts, top_tags), []),
    )

"""Tests for library statistics derivations.

Updates: v0.1.0 - 2026-10-17 - Cover totals, top prompts, category shares, and tag ranking.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from core import stats
from core.repository.maintenance import SEED_CATEGORIES
from core.stats import (
    UNCATEGORIZED_LABEL,
    category_distribution,
    most_used_prompts,
    rank_tags,
    summarize,
)
from models.category_model import Category
from models.prompt_model import Prompt

_NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _make_prompt(
    prompt_id: str,
    *,
    usage: int = 0,
    category_id: str | None = None,
    tags: list[str] | None = None,
    is_favorite: bool = False,
) -> Prompt:
    return Prompt(
        id=prompt_id,
        title=f"Prompt {prompt_id}",
        content="Body",
        category_id=category_id,
        tags=tags or [],
        is_favorite=is_favorite,
        usage_count=usage,
        created_at=_NOW,
        updated_at=_NOW,
    )


def test_summarize_empty_library() -> None:
    snapshot = summarize([], SEED_CATEGORIES)

    assert snapshot.total_prompts == 0
    assert snapshot.total_favorites == 0
    assert snapshot.total_usage == 0
    assert snapshot.most_used == []
    assert snapshot.category_distribution == []
    assert snapshot.top_tags == []


def test_summarize_totals() -> None:
    prompts = [
        _make_prompt("a", usage=3, is_favorite=True),
        _make_prompt("b", usage=4),
        _make_prompt("c", is_favorite=True),
    ]

    snapshot = summarize(prompts, SEED_CATEGORIES)

    assert snapshot.total_prompts == 3
    assert snapshot.total_favorites == 2
    assert snapshot.total_usage == 7


def test_most_used_excludes_unused_and_caps_at_limit() -> None:
    prompts = [_make_prompt(str(index), usage=index) for index in range(8)]

    top = most_used_prompts(prompts)

    assert [prompt.id for prompt in top] == ["7", "6", "5", "4", "3"]
    assert most_used_prompts([_make_prompt("idle")]) == []
    assert most_used_prompts(prompts, limit=0) == []


def test_most_used_ties_keep_input_order() -> None:
    prompts = [_make_prompt("first", usage=2), _make_prompt("second", usage=2)]

    assert [prompt.id for prompt in most_used_prompts(prompts)] == ["first", "second"]


def test_category_distribution_counts_and_percentages() -> None:
    prompts = [
        _make_prompt("a", category_id="seo"),
        _make_prompt("b", category_id="seo"),
        _make_prompt("c", category_id="react"),
        _make_prompt("d"),
    ]

    shares = category_distribution(prompts, SEED_CATEGORIES)

    assert [(share.category_id, share.count, share.percentage) for share in shares] == [
        ("seo", 2, 50),
        ("react", 1, 25),
        (None, 1, 25),
    ]
    assert shares[0].name == "SEO"
    assert shares[0].color == "green"
    assert shares[2].name == UNCATEGORIZED_LABEL


def test_dangling_category_counts_as_uncategorized() -> None:
    prompts = [_make_prompt("a", category_id="deleted"), _make_prompt("b")]

    shares = category_distribution(prompts, SEED_CATEGORIES)

    assert len(shares) == 1
    assert shares[0].category_id is None
    assert shares[0].count == 2
    assert shares[0].percentage == 100


def test_percentages_never_exceed_one_hundred() -> None:
    categories = [Category(id=f"c{index}", name=f"C{index}") for index in range(3)]
    prompts = [_make_prompt(str(index), category_id=f"c{index}") for index in range(3)]

    shares = category_distribution(prompts, categories)

    assert [share.percentage for share in shares] == [33, 33, 33]

    categories = [Category(id=f"c{index}", name=f"C{index}") for index in range(8)]
    prompts = [_make_prompt(str(index), category_id=f"c{index}") for index in range(8)]
    shares = category_distribution(prompts, categories)

    # 12.5 rounds up for every bucket; the overshoot is trimmed back to 100.
    assert sum(share.percentage for share in shares) == 100
    assert all(share.percentage in (12, 13) for share in shares)


def test_rank_tags_normalises_case_and_whitespace() -> None:
    prompts = [
        _make_prompt("a", tags=["SEO", " blog "]),
        _make_prompt("b", tags=["seo", "Blog", "dev"]),
        _make_prompt("c", tags=["seo"]),
    ]

    ranked = rank_tags(prompts)

    assert [(tag.tag, tag.count) for tag in ranked] == [("seo", 3), ("blog", 2), ("dev", 1)]
    assert rank_tags(prompts, limit=1)[0].tag == "seo"
    assert rank_tags(prompts, limit=0) == []


def test_rank_tags_caps_at_eight() -> None:
    prompts = [_make_prompt("a", tags=[f"t{index}" for index in range(12)])]

    assert len(rank_tags(prompts)) == 8


def test_failed_derivation_is_isolated(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    def _boom(*_: object, **__: object) -> list[object]:
        raise RuntimeError("broken metric")

    monkeypatch.setattr(stats, "category_distribution", _boom)
    prompts = [_make_prompt("a", usage=2, tags=["x"])]

    with caplog.at_level(logging.ERROR, logger="core.stats"):
        snapshot = summarize(prompts, SEED_CATEGORIES)

    assert snapshot.category_distribution == []
    assert snapshot.total_usage == 2
    assert [tag.tag for tag in snapshot.top_tags] == ["x"]
    assert "Statistics derivation failed" in caplog.text

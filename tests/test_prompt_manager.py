"""Tests for PromptManager lifecycle, category, search, analytics, and refinement APIs.

Updates:
  v0.3.1 - 2026-10-18 - Check category edits keep the stored order.
  v0.3.0 - 2026-10-17 - Cover refinement routing and storage error translation.
  v0.2.0 - 2026-10-16 - Cover category reparenting and the uncategorise cascade.
  v0.1.0 - 2026-10-08 - Cover write-through prompt CRUD and usage tracking.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from core import (
    CategoryCycleError,
    CategoryNotFoundError,
    CategoryValidationError,
    PromptEngineeringError,
    PromptEngineeringUnavailable,
    PromptManager,
    PromptNotFoundError,
    PromptRepository,
    PromptStorageError,
    PromptValidationError,
    QueryScope,
    RepositoryError,
)

if TYPE_CHECKING:
    from conftest import FakeClock


class _StubEngineer:
    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.calls: list[str] = []

    def refine(self, prompt_text: str) -> str:
        self.calls.append(prompt_text)
        return self.reply


def test_bootstrap_seeds_once(repository: PromptRepository, clock: FakeClock) -> None:
    first = PromptManager(repository, clock=clock)
    second = PromptManager(repository, clock=clock)

    assert first.bootstrap() is True
    assert second.bootstrap() is False
    assert len(second.categories) == 6
    assert {prompt.id for prompt in second.prompts} == {"p1", "p2"}


def test_bootstrap_without_seeding_leaves_library_empty(empty_manager: PromptManager) -> None:
    assert empty_manager.prompts == []
    assert empty_manager.categories == []


def test_recent_limit_must_be_positive(repository: PromptRepository) -> None:
    with pytest.raises(ValueError):
        PromptManager(repository, recent_limit=0)


def test_create_prompt_writes_through(
    manager: PromptManager,
    repository: PromptRepository,
) -> None:
    prompt = manager.create_prompt(
        "Cold email",
        "Write a cold outreach email for [PRODUCT].",
        category_id="marketing",
        tags="sales, email",
    )

    assert prompt.created_at == prompt.updated_at
    assert prompt.usage_count == 0
    assert manager.prompts[0].id == prompt.id
    assert repository.get_prompt(prompt.id) == prompt


@pytest.mark.parametrize(("title", "content"), [("", "body"), ("title", "   ")])
def test_create_prompt_rejects_blank_fields(
    manager: PromptManager,
    title: str,
    content: str,
) -> None:
    before = len(manager.prompts)

    with pytest.raises(PromptValidationError):
        manager.create_prompt(title, content)

    assert len(manager.prompts) == before


def test_create_prompt_with_unknown_category_fails(manager: PromptManager) -> None:
    with pytest.raises(CategoryNotFoundError):
        manager.create_prompt("Title", "Body", category_id="nope")


def test_update_prompt_merges_and_bumps_updated_at(manager: PromptManager) -> None:
    original = manager.get_prompt("p2")

    updated = manager.update_prompt("p2", title="React Hooks Specialist", tags=["dev"])

    assert updated.title == "React Hooks Specialist"
    assert updated.tags == ["dev"]
    assert updated.content == original.content
    assert updated.usage_count == original.usage_count
    assert updated.created_at == original.created_at
    assert updated.updated_at > original.updated_at
    assert manager.query(QueryScope.all_prompts())[0].id == "p2"


def test_update_prompt_rejects_unknown_fields(manager: PromptManager) -> None:
    with pytest.raises(TypeError):
        manager.update_prompt("p2", usage_count=99)


def test_update_prompt_rejects_blank_title(manager: PromptManager) -> None:
    with pytest.raises(PromptValidationError):
        manager.update_prompt("p2", title="  ")
    assert manager.get_prompt("p2").title == "React Component Specialist"


def test_update_missing_prompt_raises(manager: PromptManager) -> None:
    with pytest.raises(PromptNotFoundError):
        manager.update_prompt("missing", title="x")


def test_toggle_favorite_flips_flag(manager: PromptManager) -> None:
    assert manager.toggle_favorite("p2").is_favorite is True
    assert manager.toggle_favorite("p2").is_favorite is False


def test_record_usage_twice_increments_by_two(manager: PromptManager) -> None:
    before = manager.get_prompt("p1")

    manager.record_usage("p1")
    after = manager.record_usage("p1")

    assert after.usage_count == before.usage_count + 2
    assert after.last_used_at is not None
    assert after.last_used_at >= before.updated_at
    assert after.updated_at >= after.created_at


def test_reset_usage_clears_counter(manager: PromptManager) -> None:
    reset = manager.reset_usage("p2")

    assert reset.usage_count == 0
    assert reset.last_used_at is None


def test_delete_prompt_is_idempotent(manager: PromptManager) -> None:
    manager.delete_prompt("p1")
    manager.delete_prompt("p1")

    with pytest.raises(PromptNotFoundError):
        manager.get_prompt("p1")
    assert [prompt.id for prompt in manager.prompts] == ["p2"]


def test_create_category_under_parent(manager: PromptManager) -> None:
    category = manager.create_category("Newsletters", "marketing", color="orange")

    assert category.parent_id == "marketing"
    assert category.color == "orange"
    assert category.id in manager.category_tree().subtree_ids("marketing")


def test_create_category_validation(manager: PromptManager) -> None:
    with pytest.raises(CategoryValidationError):
        manager.create_category("   ")
    with pytest.raises(CategoryNotFoundError):
        manager.create_category("Orphan", "missing")


def test_rename_category(manager: PromptManager) -> None:
    renamed = manager.rename_category("writing", "Fiction")

    assert renamed.name == "Fiction"
    assert manager.get_category("writing").name == "Fiction"
    with pytest.raises(CategoryValidationError):
        manager.rename_category("writing", "")


def test_rename_and_move_keep_stored_category_order(manager: PromptManager) -> None:
    original_order = [category.id for category in manager.categories]

    manager.rename_category("marketing", "Growth")
    manager.move_category("react", "writing")
    manager.refresh()

    assert [category.id for category in manager.categories] == original_order
    assert manager.categories[0].name == "Growth"


def test_move_category_reparents(manager: PromptManager) -> None:
    moved = manager.move_category("react", "writing")

    assert moved.parent_id == "writing"
    assert "react" in manager.category_tree().subtree_ids("writing")
    assert manager.move_category("react", None).parent_id is None


def test_move_category_into_descendant_raises_cycle(manager: PromptManager) -> None:
    with pytest.raises(CategoryCycleError):
        manager.move_category("marketing", "seo")
    with pytest.raises(CategoryValidationError):
        manager.move_category("marketing", "marketing")
    assert manager.get_category("marketing").parent_id is None


def test_delete_category_uncategorizes_prompts(manager: PromptManager) -> None:
    extra = manager.create_prompt("Thread", "Write a thread", category_id="social-media")

    affected = manager.delete_category("social-media")

    assert affected == 2
    assert manager.get_prompt("p1").category_id is None
    assert manager.get_prompt(extra.id).category_id is None
    with pytest.raises(CategoryNotFoundError):
        manager.get_category("social-media")
    assert manager.query("marketing") == []


def test_delete_category_keeps_children_as_roots(manager: PromptManager) -> None:
    manager.delete_category("coding")

    tree = manager.category_tree()
    assert "react" in {category.id for category in tree.roots()}
    assert manager.get_prompt("p2").category_id == "react"


def test_delete_unknown_category_is_noop(manager: PromptManager) -> None:
    assert manager.delete_category("ghost") == 0
    assert len(manager.categories) == 6


def test_query_accepts_view_strings(manager: PromptManager) -> None:
    assert [prompt.id for prompt in manager.query("favorites")] == ["p1"]
    assert [prompt.id for prompt in manager.query("marketing", "blog")] == ["p1"]
    assert [prompt.id for prompt in manager.favorites()] == ["p1"]


def test_recent_prompts_respects_limit(repository: PromptRepository, clock: FakeClock) -> None:
    prompt_manager = PromptManager(repository, clock=clock, recent_limit=1)
    prompt_manager.bootstrap()
    created = prompt_manager.create_prompt("Latest", "Newest content")

    assert [prompt.id for prompt in prompt_manager.recent_prompts()] == [created.id]
    assert prompt_manager.query("recent") == prompt_manager.recent_prompts()


def test_stats_reflect_library(manager: PromptManager) -> None:
    manager.record_usage("p1")

    snapshot = manager.stats()

    assert snapshot.total_prompts == 2
    assert snapshot.total_favorites == 1
    assert snapshot.total_usage == 6
    assert [prompt.id for prompt in snapshot.most_used] == ["p2", "p1"]
    assert {share.category_id for share in snapshot.category_distribution} == {
        "social-media",
        "react",
    }


def test_refine_without_engineer_is_unavailable(manager: PromptManager) -> None:
    with pytest.raises(PromptEngineeringUnavailable):
        manager.refine_prompt_text("Make this better")


def test_refine_rejects_blank_text(manager: PromptManager) -> None:
    manager.set_prompt_engineer(_StubEngineer("unused"))  # type: ignore[arg-type]

    with pytest.raises(PromptEngineeringError):
        manager.refine_prompt_text("   ")


def test_refine_delegates_without_persisting(manager: PromptManager) -> None:
    engineer = _StubEngineer("Improved prompt")
    manager.set_prompt_engineer(engineer)  # type: ignore[arg-type]
    before = manager.get_prompt("p2")

    refined = manager.refine_prompt_text(before.content)

    assert refined == "Improved prompt"
    assert engineer.calls == [before.content]
    assert manager.get_prompt("p2") == before


def test_storage_failures_become_prompt_storage_error(
    manager: PromptManager,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _fail(*_: object, **__: object) -> None:
        raise RepositoryError("disk full")

    monkeypatch.setattr(manager.repository, "put_prompt", _fail)

    with pytest.raises(PromptStorageError):
        manager.create_prompt("Title", "Body")
    assert len(manager.prompts) == 2


def test_reset_all_data_and_context_manager(manager: PromptManager) -> None:
    with manager as active:
        active.reset_all_data()
        assert active.prompts == []
        assert active.categories == []
    assert manager.prompts == []

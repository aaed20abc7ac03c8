"""End-to-end checks for the PromptMind command line.

Updates:
  v0.2.0 - 2026-10-16 - Cover refine, category move, and exit code mapping.
  v0.1.0 - 2026-10-08 - Cover listing, editing, and statistics commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

import main
from cli.commands import EXIT_INVALID, EXIT_NOT_FOUND, EXIT_OK, EXIT_STORAGE
from cli.parser import parse_args
from cli.utils import describe_path, mask_secret
from core import PromptEngineer, PromptRepository, RepositoryError


@pytest.fixture
def db_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "cli.db"
    monkeypatch.setenv("PROMPTMIND_DB_PATH", str(path))
    return path


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, str]:
    code = main.main(list(argv))
    return code, capsys.readouterr().out


def test_default_command_lists_seeded_prompts(
    db_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code, out = _run(capsys)

    assert code == EXIT_OK
    assert "Blog Post Generator" in out
    assert "React Component Specialist" in out
    assert db_path.exists()


def test_list_scope_and_search(db_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code, out = _run(capsys, "list", "--scope", "coding")
    assert code == EXIT_OK
    assert "React Component Specialist" in out
    assert "Blog Post Generator" not in out

    code, out = _run(capsys, "list", "--search", "no-such-text")
    assert code == EXIT_OK
    assert "No prompts found." in out


def test_add_then_show(db_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code, out = _run(
        capsys,
        "add",
        "--title",
        "Meta description",
        "--content",
        "Write a meta description for [PAGE].",
        "--category",
        "seo",
        "--tags",
        "seo, copy",
    )
    assert code == EXIT_OK
    prompt_id = out.split()[2]

    code, out = _run(capsys, "show", prompt_id)

    assert code == EXIT_OK
    assert "Category:  SEO" in out
    assert "Tags:      seo, copy" in out


def test_add_with_blank_title_is_invalid(
    db_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code, out = _run(capsys, "add", "--title", " ", "--content", "Body")

    assert code == EXIT_INVALID
    assert "title cannot be empty" in out


def test_copy_records_usage(db_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code, out = _run(capsys, "copy", "p1")
    assert code == EXIT_OK
    assert out.startswith("Write a comprehensive blog post")

    prompt = PromptRepository(db_path).get_prompt("p1")
    assert prompt is not None
    assert prompt.usage_count == 1
    assert prompt.last_used_at is not None


def test_edit_favorite_reset_and_delete(db_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(capsys, "edit", "p2", "--uncategorize", "--title", "React Expert")[0] == EXIT_OK
    assert _run(capsys, "favorite", "p2")[0] == EXIT_OK
    assert _run(capsys, "reset-usage", "p2")[0] == EXIT_OK

    prompt = PromptRepository(db_path).get_prompt("p2")
    assert prompt is not None
    assert prompt.title == "React Expert"
    assert prompt.category_id is None
    assert prompt.is_favorite is True
    assert prompt.usage_count == 0

    assert _run(capsys, "delete", "p2")[0] == EXIT_OK
    assert PromptRepository(db_path).get_prompt("p2") is None


def test_edit_without_changes(db_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code, out = _run(capsys, "edit", "p1")

    assert code == EXIT_OK
    assert "Nothing to update." in out


def test_missing_prompt_maps_to_not_found(
    db_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code, out = _run(capsys, "show", "missing")

    assert code == EXIT_NOT_FOUND
    assert "Prompt missing not found" in out


def test_category_commands(db_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code, out = _run(capsys, "categories")
    assert code == EXIT_OK
    assert "- Marketing (marketing) [0]" in out
    assert "  - Social Media (social-media) [1]" in out

    assert _run(capsys, "category-rename", "writing", "Fiction")[0] == EXIT_OK
    assert _run(capsys, "category-move", "react", "--parent", "writing")[0] == EXIT_OK
    code, out = _run(capsys, "category-move", "marketing", "--parent", "seo")
    assert code == EXIT_INVALID
    assert "descendant" in out

    code, out = _run(capsys, "category-delete", "social-media")
    assert code == EXIT_OK
    assert "1 prompt(s) uncategorized" in out

    code, out = _run(capsys, "categories")
    assert "Fiction (writing)" in out
    assert "  - React (react) [1]" in out
    assert "social-media" not in out


def test_category_add_under_unknown_parent(
    db_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code, _ = _run(capsys, "category-add", "Orphan", "--parent", "ghost")

    assert code == EXIT_NOT_FOUND


def test_stats_output(db_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code, out = _run(capsys, "stats")

    assert code == EXIT_OK
    assert "Prompts:   2" in out
    assert "Favorites: 1" in out
    assert "Usage:     5" in out
    assert " 50%" in out
    assert "#blog" in out


def test_refine_without_configuration_is_invalid(
    db_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code, out = _run(capsys, "refine", "--text", "Write a poem")

    assert code == EXIT_INVALID
    assert "PROMPTMIND_LITELLM_MODEL" in out


def test_refine_apply_saves_content(
    db_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("PROMPTMIND_LITELLM_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("PROMPTMIND_LITELLM_API_KEY", "test-key")

    def _fake_refine(self: PromptEngineer, prompt_text: str) -> str:
        return f"Refined: {prompt_text}"

    monkeypatch.setattr(PromptEngineer, "refine", _fake_refine)

    code, _ = _run(capsys, "refine", "p2", "--apply")

    assert code == EXIT_OK
    prompt = PromptRepository(db_path).get_prompt("p2")
    assert prompt is not None
    assert prompt.content.startswith("Refined: Act as a Senior React Engineer")


def test_refine_apply_requires_prompt_id(
    db_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code, out = _run(capsys, "refine", "--text", "Draft", "--apply")

    assert code == EXIT_INVALID
    assert "--apply requires a prompt id." in out


def test_storage_failure_exit_code(
    db_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def _fail(self: Any, prompt: Any) -> None:
        raise RepositoryError("disk full")

    assert _run(capsys, "list")[0] == EXIT_OK
    monkeypatch.setattr(PromptRepository, "put_prompt", _fail)

    code, out = _run(capsys, "favorite", "p1")

    assert code == EXIT_STORAGE
    assert "Storage failure" in out


def test_invalid_settings_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROMPTMIND_RECENT_LIMIT", "0")

    assert main.main(["list"]) == main.EXIT_SETTINGS


def test_unopenable_database_exit_code(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")
    monkeypatch.setenv("PROMPTMIND_DB_PATH", str(blocker / "cli.db"))

    assert main.main(["list"]) == main.EXIT_INIT


def test_print_settings_masks_api_key(
    db_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("PROMPTMIND_LITELLM_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("PROMPTMIND_LITELLM_API_KEY", "sk-abcdef123456")

    code, out = _run(capsys, "--print-settings")

    assert code == EXIT_OK
    assert "sk-a...3456" in out
    assert "sk-abcdef123456" not in out
    assert "Status:               ready" in out
    assert not db_path.exists()


def test_parser_requires_refine_source() -> None:
    with pytest.raises(SystemExit):
        parse_args(["refine"])


def test_cli_helpers(tmp_path: Path) -> None:
    assert mask_secret(None) == "not set"
    assert mask_secret("short") == "set (****)"
    assert describe_path(tmp_path) == f"{tmp_path} (exists but is a directory)"
    missing = tmp_path / "missing" / "file.db"
    assert describe_path(missing, allow_missing_file=True).startswith(f"{missing} (missing")

"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-10-17 - Add repository and manager fixtures with a controllable clock.
  v0.1.0 - 2026-10-08 - Isolate tests from PROMPTMIND_* environment and working-dir config files.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from core import PromptManager, PromptRepository

if TYPE_CHECKING:
    from pathlib import Path

_PROVIDER_KEYS = ("LITELLM_MODEL", "LITELLM_API_KEY", "LITELLM_API_BASE", "GEMINI_API_KEY")


class FakeClock:
    """Monotonic clock advancing one second per reading."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 1, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        value = self.current
        self.current = value + timedelta(seconds=1)
        return value


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep host configuration out of settings resolution."""
    for key in list(os.environ):
        if key.startswith("PROMPTMIND_") or key in _PROVIDER_KEYS:
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repository(tmp_path: Path) -> PromptRepository:
    return PromptRepository(tmp_path / "library.db")


@pytest.fixture
def manager(repository: PromptRepository, clock: FakeClock) -> PromptManager:
    """Return a bootstrapped manager over the seeded starter catalogue."""
    prompt_manager = PromptManager(repository, clock=clock)
    prompt_manager.bootstrap()
    return prompt_manager


@pytest.fixture
def empty_manager(repository: PromptRepository, clock: FakeClock) -> PromptManager:
    """Return a manager over an unseeded, empty library."""
    prompt_manager = PromptManager(repository, clock=clock, seed_on_first_run=False)
    prompt_manager.bootstrap()
    return prompt_manager

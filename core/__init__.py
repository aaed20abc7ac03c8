"""Core service layer for PromptMind.

Updates:
  v0.3.0 - 2026-10-16 - Export prompt engineering helpers alongside the manager API.
  v0.2.0 - 2026-10-07 - Export query, tree, and statistics helpers.
  v0.1.0 - 2026-10-05 - Surface PromptRepository and the initial PromptManager API.
"""

from .category_tree import CategoryTree, subtree_ids
from .exceptions import (
    CategoryCycleError,
    CategoryError,
    CategoryNotFoundError,
    CategoryValidationError,
    PromptEngineeringUnavailable,
    PromptManagerError,
    PromptNotFoundError,
    PromptStorageError,
    PromptValidationError,
)
from .factory import build_prompt_engineer, build_prompt_manager
from .prompt_engineering import PromptEngineer, PromptEngineeringError
from .prompt_manager import PromptManager
from .query import QueryScope, ScopeKind, matches_search, query_prompts
from .repository import Collection, PromptRepository, RepositoryError
from .stats import CategoryShare, StatsSnapshot, TagCount, summarize

__all__ = [
    "CategoryCycleError",
    "CategoryError",
    "CategoryNotFoundError",
    "CategoryShare",
    "CategoryTree",
    "CategoryValidationError",
    "Collection",
    "PromptEngineer",
    "PromptEngineeringError",
    "PromptEngineeringUnavailable",
    "PromptManager",
    "PromptManagerError",
    "PromptNotFoundError",
    "PromptRepository",
    "PromptStorageError",
    "PromptValidationError",
    "QueryScope",
    "RepositoryError",
    "ScopeKind",
    "StatsSnapshot",
    "TagCount",
    "build_prompt_engineer",
    "build_prompt_manager",
    "matches_search",
    "query_prompts",
    "subtree_ids",
    "summarize",
]

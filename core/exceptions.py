"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`PromptManagerError`, allowing
callers to catch a single base class for any manager-related failure while
still distinguishing individual error categories when needed.

Updates:
  v0.3.0 - 2026-10-15 - Add category cycle error for reparenting.
  v0.2.0 - 2026-10-12 - Add validation errors raised before records reach storage.
  v0.1.0 - 2026-10-05 - Created module.
"""

from __future__ import annotations


class PromptManagerError(Exception):
    """Base exception for PromptMind failures."""


# ---------------------------------------------------------------------------
# Prompt-specific errors
# ---------------------------------------------------------------------------


class PromptNotFoundError(PromptManagerError):
    """Raised when a prompt cannot be located in the backing store."""


class PromptStorageError(PromptManagerError):
    """Raised when interactions with the persistent backend fail."""


class PromptValidationError(PromptManagerError, ValueError):
    """Raised when a prompt with an empty title or content is saved."""


class PromptEngineeringUnavailable(PromptManagerError):
    """Raised when prompt refinement is requested without an engineer configured."""


# ---------------------------------------------------------------------------
# Category errors
# ---------------------------------------------------------------------------


class CategoryError(PromptManagerError):
    """Base class for prompt category management failures."""


class CategoryNotFoundError(CategoryError):
    """Raised when a requested category does not exist."""


class CategoryValidationError(CategoryError, ValueError):
    """Raised when a category with an empty name or self-reference is saved."""


class CategoryCycleError(CategoryValidationError):
    """Raised when reparenting would make a category its own ancestor."""

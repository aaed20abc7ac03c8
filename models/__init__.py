"""Data models for PromptMind.

Updates: v0.2.0 - 2026-10-12 - Export Category alongside Prompt.
Updates: v0.1.0 - 2026-10-05 - Export Prompt dataclass.
"""

from .category_model import Category
from .prompt_model import Prompt, normalize_tags

__all__ = [
    "Category",
    "Prompt",
    "normalize_tags",
]

"""Pydantic input models for operations on the file currently open in Obsidian."""

from __future__ import annotations

from pydantic import Field

from .base import BaseVaultInput
from .file_models import LinePatchMixin


class GetActiveFileInput(BaseVaultInput):
    """Input model for get_active_file tool."""


class DeleteActiveFileInput(BaseVaultInput):
    """Input model for delete_active_file tool."""


class AppendToActiveFileInput(BaseVaultInput):
    """Input model for append_to_active_file tool."""

    content: str = Field(min_length=1, description="Content to append to the active file.")


class ReplaceActiveFileInput(BaseVaultInput):
    """Input model for replace_active_file tool."""

    content: str = Field(description="New content for the active file. Can be empty.")


class PatchActiveFileInput(LinePatchMixin, BaseVaultInput):
    """Input model for patch_active_file tool.

    Examples:
        >>> PatchActiveFileInput(insertions=[{"line": 0, "content": "# Title"}])
    """

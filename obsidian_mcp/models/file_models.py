"""Pydantic input models for vault file, directory and navigation operations.

This module defines input models for:
- Reading, creating, appending to, replacing and deleting files
- Line-based patching of files and of the active file
- Listing directories
- Opening a file in the Obsidian interface
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .base import BaseFileInput, BaseVaultInput


# ==============================================================================
# LINE PATCH OPERATIONS
# ==============================================================================


class LineInsertion(BaseModel):
    """Insert content before a 0-based line."""

    line: int = Field(ge=0, description="Line number to insert at (0-based)")
    content: str = Field(description="Content to insert; may span several lines")


class LineDeletion(BaseModel):
    """Delete an inclusive, 0-based line range."""

    start_line: int = Field(ge=0, description="Start line to delete (0-based, inclusive)")
    end_line: int = Field(ge=0, description="End line to delete (0-based, inclusive)")

    @model_validator(mode="after")
    def validate_range(self) -> LineDeletion:
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) must not be before start_line ({self.start_line})"
            )
        return self


class LineReplacement(BaseModel):
    """Replace an inclusive, 0-based line range with new content."""

    start_line: int = Field(ge=0, description="Start line to replace (0-based, inclusive)")
    end_line: int = Field(ge=0, description="End line to replace (0-based, inclusive)")
    content: str = Field(description="New content for the lines")

    @model_validator(mode="after")
    def validate_range(self) -> LineReplacement:
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) must not be before start_line ({self.start_line})"
            )
        return self


class LinePatchMixin(BaseModel):
    """Patch fields shared by patch_file and patch_active_file."""

    insertions: Optional[list[LineInsertion]] = Field(None, description="Lines to insert")
    deletions: Optional[list[LineDeletion]] = Field(None, description="Line ranges to delete")
    replacements: Optional[list[LineReplacement]] = Field(
        None, description="Line ranges to replace with new content"
    )

    @model_validator(mode="after")
    def validate_has_operations(self) -> LinePatchMixin:
        if not (self.insertions or self.deletions or self.replacements):
            raise ValueError(
                "Provide at least one of insertions, deletions or replacements."
            )
        return self


# ==============================================================================
# FILE OPERATIONS
# ==============================================================================


class GetFileInput(BaseFileInput):
    """Input model for get_file tool.

    Examples:
        >>> GetFileInput(path="Daily Notes/2025-10-27.md")
    """


class DeleteFileInput(BaseFileInput):
    """Input model for delete_file tool."""


class CreateFileInput(BaseFileInput):
    """Input model for create_file and replace_file tools.

    Writes the full content of a file, creating it if missing. Empty content
    is allowed (blank note).

    Examples:
        >>> CreateFileInput(path="Projects/New.md", content="# New\\n")
    """

    content: str = Field(description="Full content to write to the file. Can be empty.")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"path": "Projects/New Project.md", "content": "# New Project\n\nGoals:\n- Goal 1"},
            ]
        }
    )


class AppendToFileInput(BaseFileInput):
    """Input model for append_to_file tool."""

    content: str = Field(min_length=1, description="Content to append to the file. Must not be empty.")


class PatchFileInput(LinePatchMixin, BaseFileInput):
    """Input model for patch_file tool.

    Examples:
        >>> PatchFileInput(path="Todo.md", deletions=[{"start_line": 2, "end_line": 3}])
    """


# ==============================================================================
# DIRECTORIES & NAVIGATION
# ==============================================================================


class ListDirectoryInput(BaseVaultInput):
    """Input model for list_vault_files and list_directory tools."""

    path: str = Field(
        "",
        description="Directory path relative to the vault root (defaults to the vault root).",
        examples=["", "Projects", "Daily Notes/2025"],
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        cleaned = v.strip().strip("/")
        if any(part in {".", ".."} for part in cleaned.split("/")):
            raise ValueError(f"Directory path cannot contain '.' or '..' segments: '{cleaned}'")
        return cleaned


class OpenFileInput(BaseFileInput):
    """Input model for open_file tool."""

    new_leaf: Optional[bool] = Field(
        None,
        description="Open the file in a new leaf (tab). Omit to let Obsidian decide.",
    )

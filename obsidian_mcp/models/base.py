"""Base Pydantic models for MCP tool input validation.

Base Models:
- BaseVaultInput: optional vault name shared by every REST-backed tool
- BaseFileInput: adds a vault-relative file path
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


def clean_vault_name(v: Optional[str]) -> Optional[str]:
    """Strip an optional vault name, rejecting blank strings.

    Raises:
        ValueError: If ``v`` is a string containing only whitespace.
    """
    if v is not None and not v.strip():
        raise ValueError(
            "Vault name cannot be empty. "
            "Either omit the vault parameter to use the active vault, "
            "or provide a valid vault name from list_vaults()."
        )
    return v.strip() if v else None


def clean_file_path(v: str) -> str:
    """Normalize a vault-relative file path.

    Strips whitespace and leading slashes and rejects ``.``/``..`` segments.

    Raises:
        ValueError: If the path is empty or contains traversal segments.
    """
    cleaned = v.strip().lstrip("/")
    if not cleaned:
        raise ValueError(
            "File path cannot be empty. "
            "Provide a path relative to the vault root like 'Daily Notes/2025-10-27.md'."
        )

    parts = cleaned.split("/")
    if any(part in {".", ".."} for part in parts):
        raise ValueError(
            "File path cannot contain '.' or '..' path segments. "
            f"Invalid path: '{cleaned}'"
        )
    return cleaned


class BaseVaultInput(BaseModel):
    """Base model for tools that talk to a vault's REST API.

    All REST-backed input models inherit from this class.
    """

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use the active vault). "
            "Use list_vaults() to discover available vaults."
        ),
    )

    @field_validator("vault")
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        return clean_vault_name(v)


class BaseFileInput(BaseVaultInput):
    """Base model for operations on one file inside the vault."""

    path: str = Field(
        min_length=1,
        description=(
            "Path to the file relative to the vault root, including the extension. "
            "Examples: 'Daily Notes/2025-10-27.md', 'Projects/Roadmap.md'."
        ),
        examples=["Daily Notes/2025-10-27.md", "README.md"],
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        return clean_file_path(v)

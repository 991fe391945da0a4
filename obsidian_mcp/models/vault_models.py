"""Pydantic input models for vault management operations.

This module defines input models for vault management tools:
- List configured vaults
- Inspect one vault
- Add and remove vaults
- Get and set the active vault
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from obsidian_mcp.constants import DEFAULT_BASE_URL


def _require_vault_name(v: str) -> str:
    cleaned = v.strip()
    if not cleaned:
        raise ValueError(
            "Vault name cannot be empty. "
            "Use list_vaults() to see available vaults."
        )
    return cleaned


class ListVaultsInput(BaseModel):
    """Input model for list_vaults tool.

    Takes no parameters; the model exists for API consistency.
    """

    model_config = ConfigDict(json_schema_extra={"examples": [{}]})


class GetActiveVaultInput(BaseModel):
    """Input model for get_active_vault tool (no parameters)."""

    model_config = ConfigDict(json_schema_extra={"examples": [{}]})


class VaultNameInput(BaseModel):
    """Input model for tools addressing one configured vault by name.

    Used by get_vault_info, set_active_vault and remove_vault.

    Examples:
        >>> VaultNameInput(vault="work")
    """

    vault: str = Field(
        min_length=1,
        description=(
            "Name of a configured vault. "
            "Use list_vaults() to discover valid names."
        ),
        examples=["work", "personal"],
    )

    @field_validator("vault")
    @classmethod
    def validate_vault(cls, v: str) -> str:
        return _require_vault_name(v)


class AddVaultInput(BaseModel):
    """Input model for add_vault tool.

    Registers a vault's Local REST API connection. The name must be unique;
    adding never overwrites an existing vault.

    Examples:
        >>> AddVaultInput(name="work", api_key="abc123")
        >>> AddVaultInput(name="home", api_key="k", base_url="https://127.0.0.1:27124", set_as_active=True)
    """

    name: str = Field(
        min_length=1,
        description="Unique name for the vault, used by every other tool's vault parameter.",
        examples=["work", "personal"],
    )
    api_key: str = Field(
        min_length=1,
        description="API key shown in the Obsidian Local REST API plugin settings.",
    )
    base_url: str = Field(
        DEFAULT_BASE_URL,
        description=f"Base URL of the vault's REST API (default: {DEFAULT_BASE_URL}).",
        examples=[DEFAULT_BASE_URL, "https://127.0.0.1:27124"],
    )
    display_name: Optional[str] = Field(
        None,
        description="Human readable name for the vault (defaults to name).",
    )
    set_as_active: bool = Field(
        False,
        description="Make this vault the active vault for subsequent operations.",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_vault_name(v)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("API key cannot be empty.")
        return cleaned

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"name": "work", "api_key": "your-api-key"},
                {
                    "name": "personal",
                    "api_key": "your-api-key",
                    "base_url": "http://localhost:27124",
                    "display_name": "Personal Notes",
                    "set_as_active": True,
                },
            ]
        }
    )

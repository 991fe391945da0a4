"""Data models for vault connection records and the persisted registry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

from obsidian_mcp.constants import DEFAULT_PORT


def derive_port(base_url: str) -> int:
    """Return the explicit port of ``base_url`` or the REST API default."""
    try:
        port = urlsplit(base_url).port
    except ValueError:
        port = None
    return port or DEFAULT_PORT


def mask_api_key(api_key: str) -> str:
    """Return a display-safe form of an API key."""
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return f"{api_key[:4]}...{api_key[-4:]}"


class VaultConfig(BaseModel):
    """Connection settings for one Obsidian vault.

    Field aliases match the persisted JSON layout (``apiKey``, ``baseUrl`` ...).
    The API key is kept out of ``repr`` so it never lands in logs.
    """

    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(alias="apiKey", min_length=1, repr=False)
    base_url: str = Field(alias="baseUrl")
    name: str = Field(min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    is_active: bool = Field(default=False, alias="isActive")
    last_used: Optional[datetime] = Field(default=None, alias="lastUsed")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("API key is required")
        if not v.isascii() or not v.isprintable():
            raise ValueError("API key must contain only printable ASCII characters")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Vault name is required")
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute URL with a scheme and a host."""
        cleaned = v.strip()
        try:
            parts = urlsplit(cleaned)
            parts.port  # raises ValueError on a malformed port
        except ValueError as exc:
            raise ValueError(f"Base URL must be a valid URL: {exc}") from exc
        if parts.scheme not in {"http", "https"} or not parts.hostname:
            raise ValueError(
                f"Base URL must be an absolute http(s) URL such as http://localhost:27123, got '{v}'"
            )
        return cleaned

    @property
    def masked_api_key(self) -> str:
        return mask_api_key(self.api_key)


class VaultCollection(BaseModel):
    """The whole persisted vault registry.

    ``active_vault`` and the ``is_active`` flags describe the same thing twice
    (the file format needs both). They are only changed through
    :meth:`mark_active`, which keeps them in agreement.
    """

    model_config = ConfigDict(populate_by_name=True)

    vaults: dict[str, VaultConfig] = Field(default_factory=dict)
    default_vault: Optional[str] = Field(default=None, alias="defaultVault")
    active_vault: Optional[str] = Field(default=None, alias="activeVault")

    def mark_active(self, name: Optional[str], when: Optional[datetime] = None) -> None:
        """Make ``name`` the only active vault, or clear the active vault.

        Args:
            name: Key of the vault to activate, or ``None`` for no active vault.
            when: Timestamp recorded as the vault's ``last_used`` value. Left
                untouched when omitted.

        Raises:
            KeyError: If ``name`` is not a key of :attr:`vaults`.
        """
        if name is not None and name not in self.vaults:
            raise KeyError(name)

        for key, vault in self.vaults.items():
            vault.is_active = key == name

        self.active_vault = name
        if name is not None and when is not None:
            self.vaults[name].last_used = when

    def first_vault_name(self) -> Optional[str]:
        """Return the first key in insertion order, if any."""
        return next(iter(self.vaults), None)

    def to_json_payload(self) -> dict[str, Any]:
        """Return the persisted JSON layout of the collection."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class VaultSummary:
    """Read-only view of a vault for listing and display."""

    name: str
    display_name: str
    base_url: str
    is_active: bool
    last_used: Optional[datetime]

    @classmethod
    def from_config(cls, name: str, vault: VaultConfig) -> VaultSummary:
        return cls(
            name=name,
            display_name=vault.name,
            base_url=vault.base_url,
            is_active=vault.is_active,
            last_used=vault.last_used,
        )

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "displayName": self.display_name,
            "baseUrl": self.base_url,
            "isActive": self.is_active,
            "lastUsed": self.last_used.isoformat() if self.last_used else None,
        }

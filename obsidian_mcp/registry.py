"""Vault registry: add, remove, list and select Obsidian vaults."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from obsidian_mcp.constants import DEFAULT_BASE_URL
from obsidian_mcp.data_models import VaultCollection, VaultConfig, VaultSummary, derive_port
from obsidian_mcp.errors import VaultAlreadyExistsError, VaultNotFoundError
from obsidian_mcp.store import VaultStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VaultRegistry:
    """Owns the in-memory vault collection and keeps it in sync with disk.

    The collection is loaded lazily, once, on the first call to any operation.
    Mutations are serialized through a single lock; each one edits a copy of
    the collection, persists it, and only then replaces the live collection,
    so a failed save leaves memory and disk unchanged.
    """

    def __init__(self, store: VaultStore) -> None:
        self._store = store
        self._collection = VaultCollection()
        self._initialized = False
        self._init_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._load_warnings: list[str] = []

    @property
    def config_path(self) -> Path:
        return self._store.path

    @property
    def load_warnings(self) -> list[str]:
        """Problems recovered from while loading the vault file."""
        return list(self._load_warnings)

    @property
    def active_vault_name(self) -> Optional[str]:
        return self._collection.active_vault

    @property
    def default_vault_name(self) -> Optional[str]:
        return self._collection.default_vault

    async def initialize(self) -> None:
        """Load the persisted collection if this has not happened yet.

        Safe to call concurrently: later callers wait for the first load to
        finish instead of starting their own.

        Raises:
            PersistenceError: If the vault file exists but cannot be read. The
                registry stays uninitialized so a later call can retry.
        """
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:
                return
            result = await asyncio.to_thread(self._store.load)
            self._collection = result.collection
            self._load_warnings = result.warnings
            self._initialized = True
            logger.debug("Vault registry initialized from %s", self._store.path)

    async def list_vaults(self) -> list[VaultSummary]:
        """Return a summary of every configured vault in insertion order."""
        await self.initialize()
        return [VaultSummary.from_config(name, vault) for name, vault in self._collection.vaults.items()]

    async def get_vault_info(self, name: str) -> VaultSummary:
        """Return the summary of vault ``name``.

        Raises:
            VaultNotFoundError: If ``name`` is not configured.
        """
        await self.initialize()
        return VaultSummary.from_config(name, self._lookup(name))

    async def get_vault(self, name: str) -> VaultConfig:
        """Return a copy of the full configuration of vault ``name``.

        Raises:
            VaultNotFoundError: If ``name`` is not configured.
        """
        await self.initialize()
        return self._lookup(name).model_copy()

    async def get_active_vault(self) -> Optional[VaultConfig]:
        """Return a copy of the active vault configuration, or ``None``."""
        await self.initialize()
        name = self._collection.active_vault
        if name is None:
            return None
        return self._collection.vaults[name].model_copy()

    async def get_collection(self) -> VaultCollection:
        """Return a deep copy of the whole collection."""
        await self.initialize()
        return self._collection.model_copy(deep=True)

    async def add_vault(
        self,
        name: str,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        display_name: Optional[str] = None,
        set_as_active: bool = False,
    ) -> VaultConfig:
        """Register a new vault.

        Args:
            name: Unique key for the vault.
            api_key: Bearer token of the vault's Local REST API.
            base_url: Base URL of the REST API. Used verbatim for requests.
            display_name: Human readable name; defaults to ``name``.
            set_as_active: Make the new vault the active one.

        Returns:
            A copy of the stored configuration.

        Raises:
            VaultAlreadyExistsError: If ``name`` is already configured.
            ValueError: If any field fails validation.
            PersistenceError: If the registry file cannot be written.
        """
        await self.initialize()
        if not name or not name.strip():
            raise ValueError("Vault name is required")

        async with self._write_lock:
            if name in self._collection.vaults:
                raise VaultAlreadyExistsError(name)

            vault = VaultConfig(
                api_key=api_key,
                base_url=base_url,
                name=display_name or name,
                port=derive_port(base_url),
            )

            updated = self._collection.model_copy(deep=True)
            updated.vaults[name] = vault
            if updated.default_vault is None:
                updated.default_vault = name
            if set_as_active:
                updated.mark_active(name, _utcnow())

            await self._commit(updated)

        logger.info(
            "Added vault '%s' at %s (key %s)%s",
            name,
            vault.base_url,
            vault.masked_api_key,
            " as active vault" if set_as_active else "",
        )
        return updated.vaults[name].model_copy()

    async def remove_vault(self, name: str) -> None:
        """Delete vault ``name``.

        If it was the default, the first remaining vault becomes the default.
        If it was active, the (new) default becomes active, or no vault is
        active when none remain.

        Raises:
            VaultNotFoundError: If ``name`` is not configured.
            PersistenceError: If the registry file cannot be written.
        """
        await self.initialize()
        async with self._write_lock:
            self._lookup(name)

            updated = self._collection.model_copy(deep=True)
            del updated.vaults[name]

            if updated.default_vault == name:
                updated.default_vault = updated.first_vault_name()

            if updated.active_vault == name:
                updated.mark_active(updated.default_vault)

            await self._commit(updated)

        logger.info(
            "Removed vault '%s'; active vault is now %r",
            name,
            self._collection.active_vault,
        )

    async def set_active_vault(self, name: str) -> VaultConfig:
        """Make ``name`` the active vault and stamp its ``last_used`` time.

        Together with ``add_vault(..., set_as_active=True)`` this is the only
        place ``last_used`` changes.

        Raises:
            VaultNotFoundError: If ``name`` is not configured.
            PersistenceError: If the registry file cannot be written.
        """
        await self.initialize()
        async with self._write_lock:
            self._lookup(name)

            updated = self._collection.model_copy(deep=True)
            updated.mark_active(name, _utcnow())

            await self._commit(updated)

        logger.info("Active vault set to '%s'", name)
        return updated.vaults[name].model_copy()

    def _lookup(self, name: str) -> VaultConfig:
        try:
            return self._collection.vaults[name]
        except KeyError as exc:
            raise VaultNotFoundError(name) from exc

    async def _commit(self, updated: VaultCollection) -> None:
        await asyncio.to_thread(self._store.save, updated)
        self._collection = updated

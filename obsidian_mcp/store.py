"""JSON persistence for the vault registry."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from obsidian_mcp.data_models import VaultCollection, VaultConfig
from obsidian_mcp.errors import PersistenceError

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of :meth:`VaultStore.load`.

    ``warnings`` lists every problem that was recovered from while reading the
    file. An empty list means the file was absent or fully valid.
    """

    collection: VaultCollection
    warnings: list[str] = field(default_factory=list)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    location = ".".join(str(part) for part in errors[0].get("loc", ()))
    message = errors[0].get("msg", "invalid value")
    return f"{location}: {message}" if location else message


class VaultStore:
    """Reads and writes the vault registry file.

    The store holds no state besides the file location; the registry owns the
    in-memory collection.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> LoadResult:
        """Read the persisted collection.

        A missing file yields an empty collection. A file that is not valid
        JSON, or whose top level has the wrong shape, yields an empty collection
        and a warning. Individual invalid vault records are skipped with a
        warning while the valid ones are kept; the default and active pointers
        are then repaired so they only name surviving records.

        Returns:
            A :class:`LoadResult` holding the collection and any warnings.

        Raises:
            PersistenceError: If the file exists but cannot be read.
        """
        if not self.path.exists():
            logger.debug("No vault configuration at %s; starting empty", self.path)
            return LoadResult(VaultCollection())

        try:
            raw_text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(self.path, exc) from exc

        try:
            raw = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            return self._recover(f"Vault configuration at {self.path} is not valid JSON: {exc}")

        if not isinstance(raw, dict):
            return self._recover(f"Vault configuration at {self.path} must be a JSON object")

        raw_vaults = raw.get("vaults", {})
        if raw_vaults is None:
            raw_vaults = {}
        if not isinstance(raw_vaults, dict):
            return self._recover(f"Vault configuration at {self.path} has a malformed 'vaults' mapping")

        warnings: list[str] = []
        vaults: dict[str, VaultConfig] = {}
        for name, entry in raw_vaults.items():
            if not name.strip():
                warnings.append("Skipped a vault with an empty name")
                continue
            try:
                vaults[name] = VaultConfig.model_validate(entry)
            except ValidationError as exc:
                warnings.append(f"Skipped invalid vault '{name}': {_first_error(exc)}")

        collection = VaultCollection(
            vaults=vaults,
            default_vault=self._pointer(raw, "defaultVault", warnings),
            active_vault=self._pointer(raw, "activeVault", warnings),
        )
        self._reconcile(collection, warnings)

        for message in warnings:
            logger.warning("%s", message)

        logger.info("Loaded %d vault(s) from %s", len(collection.vaults), self.path)
        return LoadResult(collection, warnings)

    def save(self, collection: VaultCollection) -> None:
        """Write ``collection`` to disk atomically.

        The JSON is written to a temporary file in the target directory and
        moved over the old file with :func:`os.replace`, so readers only ever
        see the previous or the new content.

        Raises:
            PersistenceError: If the directory cannot be created or the file
                cannot be written.
        """
        content = json.dumps(collection.to_json_payload(), indent=2)
        temp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, self.path)
            temp_path = None
        except OSError as exc:
            raise PersistenceError(self.path, exc) from exc
        finally:
            if temp_path is not None:
                try:
                    os.unlink(temp_path)
                except OSError:
                    logger.debug("Could not remove temporary file %s", temp_path)

        logger.debug("Saved %d vault(s) to %s", len(collection.vaults), self.path)

    def _recover(self, message: str) -> LoadResult:
        logger.warning("%s; starting with an empty vault configuration", message)
        return LoadResult(VaultCollection(), [message])

    @staticmethod
    def _pointer(raw: dict[str, Any], key: str, warnings: list[str]) -> str | None:
        value = raw.get(key)
        if value is None or isinstance(value, str):
            return value or None
        warnings.append(f"Ignored non-string '{key}' value {value!r}")
        return None

    @staticmethod
    def _reconcile(collection: VaultCollection, warnings: list[str]) -> None:
        if collection.default_vault is not None and collection.default_vault not in collection.vaults:
            replacement = collection.first_vault_name()
            warnings.append(
                f"Default vault '{collection.default_vault}' is not configured; "
                f"using {repr(replacement) if replacement else 'none'}"
            )
            collection.default_vault = replacement

        active = collection.active_vault
        if active is not None and active not in collection.vaults:
            warnings.append(f"Active vault '{active}' is not configured; clearing it")
            active = None

        flagged = [name for name, vault in collection.vaults.items() if vault.is_active]
        if flagged != ([active] if active else []):
            logger.debug("Realigning active flags %s with active vault %r", flagged, active)

        collection.mark_active(active)

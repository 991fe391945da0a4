"""Error taxonomy shared by the store, registry, client and tools.

Every error raised across those layers derives from :class:`ObsidianMCPError`
and carries a :class:`ErrorKind` tag, so callers can branch on ``error.kind``
instead of inspecting messages or exception classes.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    VAULT_NOT_FOUND = "vault_not_found"
    VAULT_ALREADY_EXISTS = "vault_already_exists"
    NO_ACTIVE_VAULT = "no_active_vault"
    VAULT_CONNECTION = "vault_connection"
    REMOTE_API = "remote_api"
    PERSISTENCE = "persistence"


class ObsidianMCPError(Exception):
    """Base class for every classified failure."""

    kind: ErrorKind


class VaultNotFoundError(ObsidianMCPError):
    kind = ErrorKind.VAULT_NOT_FOUND

    def __init__(self, vault_name: str) -> None:
        super().__init__(f"Vault '{vault_name}' not found")
        self.vault_name = vault_name


class VaultAlreadyExistsError(ObsidianMCPError):
    kind = ErrorKind.VAULT_ALREADY_EXISTS

    def __init__(self, vault_name: str) -> None:
        super().__init__(f"Vault '{vault_name}' already exists")
        self.vault_name = vault_name


class NoActiveVaultError(ObsidianMCPError):
    kind = ErrorKind.NO_ACTIVE_VAULT

    def __init__(self) -> None:
        super().__init__(
            "No active vault configured. Please set an active vault or specify a vault name."
        )


class VaultConnectionError(ObsidianMCPError):
    """The vault's REST API could not be reached at all."""

    kind = ErrorKind.VAULT_CONNECTION

    def __init__(self, vault_name: str, cause: BaseException) -> None:
        detail = str(cause) or type(cause).__name__
        super().__init__(f"Failed to connect to vault '{vault_name}': {detail}")
        self.vault_name = vault_name
        self.cause = cause


class ObsidianAPIError(ObsidianMCPError):
    """The REST API answered with a non-success status."""

    kind = ErrorKind.REMOTE_API

    def __init__(self, status: int, status_text: str, response: Any = None) -> None:
        super().__init__(f"HTTP {status}: {status_text}")
        self.status = status
        self.status_text = status_text
        self.response = response


class PersistenceError(ObsidianMCPError):
    """The vault registry file could not be read or written."""

    kind = ErrorKind.PERSISTENCE

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to access vault configuration at {path}: {cause}")
        self.path = path
        self.cause = cause


def _response_detail(response: Any) -> Optional[str]:
    if isinstance(response, dict):
        for key in ("message", "error"):
            value = response.get(key)
            if isinstance(value, str) and value:
                return value
        return None
    if isinstance(response, str) and response.strip():
        return response.strip()
    return None


def describe_error(error: ObsidianMCPError) -> str:
    """Render a user-facing explanation for ``error``.

    Args:
        error: Any classified failure.

    Returns:
        A sentence telling the user what went wrong and what to do next.
    """
    if error.kind is ErrorKind.VAULT_NOT_FOUND:
        return f"Vault '{error.vault_name}' not found. Use list_vaults to see available vaults."
    if error.kind is ErrorKind.VAULT_ALREADY_EXISTS:
        return (
            f"Vault '{error.vault_name}' already exists. "
            "Use remove_vault first if you want to replace it."
        )
    if error.kind is ErrorKind.NO_ACTIVE_VAULT:
        return (
            "No active vault configured. "
            "Use set_active_vault or add_vault with set_as_active=true."
        )
    if error.kind is ErrorKind.REMOTE_API:
        detail = _response_detail(error.response)
        return f"{error} ({detail})" if detail else str(error)
    # VAULT_CONNECTION and PERSISTENCE messages are already descriptive
    return str(error)

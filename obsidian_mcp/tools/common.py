"""Helpers shared by the tool modules."""

import logging
from typing import Any, Optional

from mcp.server.fastmcp.exceptions import ToolError

from obsidian_mcp.errors import ErrorKind, ObsidianMCPError, describe_error
from obsidian_mcp.session import ServerServices

logger = logging.getLogger(__name__)

# Kinds whose message already tells the user what to do next
_SELF_EXPLANATORY = frozenset(
    {ErrorKind.VAULT_NOT_FOUND, ErrorKind.VAULT_ALREADY_EXISTS, ErrorKind.NO_ACTIVE_VAULT}
)


def tool_failure(action: str, exc: Exception) -> ToolError:
    """Turn a classified failure into the error result reported to the client.

    Args:
        action: What the tool was doing, e.g. ``"getting file"``.
        exc: A taxonomy error, or a ``ValueError`` from input handling.

    Returns:
        A :class:`ToolError` for the caller to raise.
    """
    if isinstance(exc, ObsidianMCPError):
        detail = describe_error(exc)
        if exc.kind in _SELF_EXPLANATORY:
            logger.info("Tool call rejected while %s: %s", action, detail)
            return ToolError(detail)
    else:
        detail = str(exc)

    logger.warning("Error %s: %s", action, detail)
    return ToolError(f"Error {action}: {detail}")


def target_vault(services: ServerServices, vault: Optional[str]) -> Optional[str]:
    """Name of the vault a call was aimed at, for echoing back in results."""
    return vault or services.registry.active_vault_name


def connection_status(connected: bool) -> str:
    return "connected" if connected else "disconnected"


def result_count(results: Any) -> Any:
    return len(results) if isinstance(results, list) else "unknown"

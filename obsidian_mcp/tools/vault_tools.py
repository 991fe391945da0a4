"""MCP tools for vault management.

These tools edit the persisted vault registry. Each vault is one Obsidian
Local REST API endpoint with its own base URL and API key; the active vault
is used by every other tool when the vault parameter is omitted.
"""

import asyncio
import logging
from typing import Any

from mcp.server.fastmcp import Context

from obsidian_mcp.errors import NoActiveVaultError, ObsidianMCPError
from obsidian_mcp.models import (
    AddVaultInput,
    GetActiveVaultInput,
    ListVaultsInput,
    VaultNameInput,
)
from obsidian_mcp.server import mcp
from obsidian_mcp.session import get_services
from obsidian_mcp.tools.common import connection_status, tool_failure

logger = logging.getLogger(__name__)


@mcp.tool()
async def list_vaults(
    input: ListVaultsInput,
    ctx: Context,
) -> dict[str, Any]:
    """List all configured Obsidian vaults with their connection status.

    Connection tests run concurrently, one per vault. A vault that cannot be
    reached is reported as "disconnected" rather than failing the listing.

    Args:
        input (ListVaultsInput): Validated input (no fields required)
        ctx (Context): FastMCP context carrying the vault registry

    Returns:
        {
            "vaults": [
                {
                    "name": str,
                    "displayName": str,
                    "baseUrl": str,
                    "isActive": bool,
                    "lastUsed": str | None,
                    "status": "connected" | "disconnected"
                }
            ],
            "activeVault": str | None,
            "defaultVault": str | None,
            "totalVaults": int,
            "warnings": [str]  # Problems recovered from when loading vaults.json
        }

    Examples:
        - Use when: Starting a conversation, need to see available vaults
        - Use when: User mentions a vault by name, verify it exists
        - Don't use: Only need the active vault → Use get_active_vault()

    Error Handling:
        - Vault file unreadable → Error with the file path
    """
    services = get_services(ctx)
    try:
        summaries = await services.registry.list_vaults()
        connected = await asyncio.gather(
            *(services.client.test_connection(summary.name) for summary in summaries)
        )
    except ObsidianMCPError as exc:
        raise tool_failure("listing vaults", exc) from exc

    vaults = [
        {**summary.as_payload(), "status": connection_status(is_connected)}
        for summary, is_connected in zip(summaries, connected)
    ]
    return {
        "vaults": vaults,
        "activeVault": services.registry.active_vault_name,
        "defaultVault": services.registry.default_vault_name,
        "totalVaults": len(vaults),
        "warnings": services.registry.load_warnings,
    }


@mcp.tool()
async def get_vault_info(
    input: VaultNameInput,
    ctx: Context,
) -> dict[str, Any]:
    """Get details of one vault, including connection status and server info.

    Args:
        input (VaultNameInput): Validated input containing:
            - vault (str): Name of a configured vault

    Returns:
        The vault summary plus "status" and "serverInfo" (None when the
        vault is unreachable or its server info cannot be read).

    Error Handling:
        - Unknown vault → "Vault 'x' not found. Use list_vaults to see available vaults."
    """
    services = get_services(ctx)
    try:
        summary = await services.registry.get_vault_info(input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("getting vault info", exc) from exc

    connected = await services.client.test_connection(input.vault)
    server_info = None
    if connected:
        # Server info is optional; the connection test already succeeded
        try:
            server_info = await services.client.get_server_info(input.vault)
        except ObsidianMCPError as exc:
            logger.debug("Server info for vault '%s' unavailable: %s", input.vault, exc)

    return {
        **summary.as_payload(),
        "status": connection_status(connected),
        "serverInfo": server_info,
    }


@mcp.tool()
async def set_active_vault(
    input: VaultNameInput,
    ctx: Context,
) -> dict[str, Any]:
    """Switch to a different vault for subsequent operations.

    All later tool calls that omit the vault parameter use the active vault.
    The choice is persisted, so it survives server restarts.

    Args:
        input (VaultNameInput): Validated input containing:
            - vault (str): Name of the vault to activate
                Use list_vaults() to discover valid names

    Returns:
        {"vault": str, "status": "active", "connection": "connected" | "disconnected",
         "message": str}

    Examples:
        - Use when: User says "switch to my work vault"
        - Don't use: Single operation in another vault (pass vault param directly)

    Error Handling:
        - Unknown vault → Error suggesting list_vaults()
    """
    services = get_services(ctx)
    try:
        await services.registry.set_active_vault(input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("setting active vault", exc) from exc

    status = connection_status(await services.client.test_connection(input.vault))
    return {
        "vault": input.vault,
        "status": "active",
        "connection": status,
        "message": f"Successfully switched to vault '{input.vault}'. Connection status: {status}",
    }


@mcp.tool()
async def add_vault(
    input: AddVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Add a new Obsidian vault with its API key and connection details.

    The first vault added becomes the default vault. Adding never overwrites
    an existing vault; remove it first to replace it. The connection is tested
    after the vault has been saved, and a failed test does not undo the add.

    Args:
        input (AddVaultInput): Validated input containing:
            - name (str): Unique vault name
            - api_key (str): Local REST API key
            - base_url (str, optional): Defaults to http://localhost:27123
            - display_name (str, optional): Defaults to name
            - set_as_active (bool, optional): Activate the new vault

    Returns:
        {"vault": str, "baseUrl": str, "isActive": bool,
         "connection": "connected" | "disconnected", "message": str}

    Error Handling:
        - Name already used → Error suggesting remove_vault()
        - Malformed base URL → Validation error
    """
    services = get_services(ctx)
    try:
        vault = await services.registry.add_vault(
            input.name,
            input.api_key,
            base_url=input.base_url,
            display_name=input.display_name,
            set_as_active=input.set_as_active,
        )
    except (ObsidianMCPError, ValueError) as exc:
        raise tool_failure("adding vault", exc) from exc

    status = connection_status(await services.client.test_connection(input.name))
    active_message = " and set as active vault" if input.set_as_active else ""
    return {
        "vault": input.name,
        "baseUrl": vault.base_url,
        "isActive": vault.is_active,
        "connection": status,
        "message": (
            f"Successfully added vault '{input.name}'{active_message}. "
            f"Connection status: {status}"
        ),
    }


@mcp.tool()
async def remove_vault(
    input: VaultNameInput,
    ctx: Context,
) -> dict[str, Any]:
    """Remove a vault configuration.

    If the removed vault was active, the default vault takes over, or no vault
    stays active when none remain.

    Error Handling:
        - Unknown vault → Error suggesting list_vaults()
    """
    services = get_services(ctx)
    try:
        was_active = (await services.registry.get_vault_info(input.vault)).is_active
        await services.registry.remove_vault(input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("removing vault", exc) from exc

    new_active = services.registry.active_vault_name
    message = f"Successfully removed vault '{input.vault}'"
    if was_active and new_active:
        message += f". Active vault switched to '{new_active}'"
    elif was_active:
        message += ". No active vault remaining"

    return {
        "vault": input.vault,
        "status": "removed",
        "activeVault": new_active,
        "message": message,
    }


@mcp.tool()
async def get_active_vault(
    input: GetActiveVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Get the currently active vault and whether it is reachable.

    Returns:
        {"name": str, "displayName": str, "baseUrl": str,
         "status": "connected" | "disconnected", "lastUsed": str | None}

    Error Handling:
        - No active vault → Error suggesting set_active_vault() or add_vault()
    """
    services = get_services(ctx)
    try:
        active = await services.registry.get_active_vault()
        if active is None:
            raise NoActiveVaultError()
    except ObsidianMCPError as exc:
        raise tool_failure("getting active vault", exc) from exc

    connected = await services.client.test_connection()
    return {
        "name": services.registry.active_vault_name,
        "displayName": active.name,
        "baseUrl": active.base_url,
        "status": connection_status(connected),
        "lastUsed": active.last_used.isoformat() if active.last_used else None,
    }


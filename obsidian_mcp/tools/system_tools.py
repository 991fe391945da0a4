"""MCP tools for server status and Obsidian commands."""

from datetime import datetime, timezone
from typing import Any

from mcp.server.fastmcp import Context

from obsidian_mcp.errors import ObsidianMCPError
from obsidian_mcp.models import ExecuteCommandInput, ListCommandsInput, ServerInfoInput
from obsidian_mcp.server import mcp
from obsidian_mcp.session import get_services
from obsidian_mcp.tools.common import result_count, target_vault, tool_failure


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@mcp.tool()
async def get_server_info(
    input: ServerInfoInput,
    ctx: Context,
) -> dict[str, Any]:
    """Get basic server status and details from the Obsidian Local REST API.

    Returns:
        {"serverInfo": dict, "vault": str, "timestamp": str}
    """
    services = get_services(ctx)
    try:
        server_info = await services.client.get_server_info(input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("getting server info", exc) from exc

    return {
        "serverInfo": server_info,
        "vault": target_vault(services, input.vault),
        "timestamp": _timestamp(),
    }


@mcp.tool()
async def get_api_certificate(
    input: ServerInfoInput,
    ctx: Context,
) -> dict[str, Any]:
    """Retrieve the TLS certificate of the Obsidian Local REST API server.

    Useful when the vault is reached over https with a self-signed
    certificate that the client must trust.

    Returns:
        {"certificate": str, "vault": str, "timestamp": str}
    """
    services = get_services(ctx)
    try:
        certificate = await services.client.get_api_certificate(input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("getting API certificate", exc) from exc

    return {
        "certificate": certificate,
        "vault": target_vault(services, input.vault),
        "timestamp": _timestamp(),
    }


# ==============================================================================
# COMMANDS
# ==============================================================================


@mcp.tool()
async def list_commands(
    input: ListCommandsInput,
    ctx: Context,
) -> dict[str, Any]:
    """List the Obsidian commands available in the vault.

    Returns:
        {"vault": str, "commands": [{"id": str, "name": str}], "count": int}

    Examples:
        - Use when: Looking for a command ID before execute_command()
    """
    services = get_services(ctx)
    try:
        listing = await services.client.list_commands(input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("retrieving commands", exc) from exc

    commands = listing.get("commands", []) if isinstance(listing, dict) else listing
    return {
        "vault": target_vault(services, input.vault),
        "commands": commands,
        "count": result_count(commands),
    }


@mcp.tool()
async def execute_command(
    input: ExecuteCommandInput,
    ctx: Context,
) -> dict[str, Any]:
    """Execute an Obsidian command by ID.

    Args:
        input (ExecuteCommandInput): Validated input containing:
            - command_id (str): Command ID from list_commands()
                Examples: "editor:save-file", "app:reload"
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {"commandId": str, "status": "executed", "result": Any}

    Error Handling:
        - Unknown command → HTTP 404 error from the REST API
    """
    services = get_services(ctx)
    try:
        result = await services.client.execute_command(input.command_id, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure(f"executing command '{input.command_id}'", exc) from exc

    return {
        "commandId": input.command_id,
        "status": "executed",
        "result": result or None,
    }

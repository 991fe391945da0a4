"""MCP tools for the file currently open in Obsidian.

All tools operate on whatever note has focus in the Obsidian window of the
target vault:
- Read it
- Append to it or replace it
- Patch it line by line
- Delete it
"""

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_mcp.core.patching import apply_line_patch
from obsidian_mcp.errors import ObsidianMCPError
from obsidian_mcp.models import (
    AppendToActiveFileInput,
    DeleteActiveFileInput,
    GetActiveFileInput,
    PatchActiveFileInput,
    ReplaceActiveFileInput,
)
from obsidian_mcp.server import mcp
from obsidian_mcp.session import get_services
from obsidian_mcp.tools.common import target_vault, tool_failure


@mcp.tool()
async def get_active_file(
    input: GetActiveFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Retrieve the content of the file currently open in Obsidian.

    Returns:
        {"vault": str, "content": str}

    Error Handling:
        - No file open → HTTP 404 error from the REST API
    """
    services = get_services(ctx)
    try:
        content = await services.client.get_active_file(input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("retrieving active file", exc) from exc

    return {"vault": target_vault(services, input.vault), "content": content}


@mcp.tool()
async def append_to_active_file(
    input: AppendToActiveFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Append content to the end of the file currently open in Obsidian."""
    services = get_services(ctx)
    try:
        await services.client.append_to_active_file(input.content, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("appending to active file", exc) from exc

    return {"vault": target_vault(services, input.vault), "status": "appended"}


@mcp.tool()
async def replace_active_file(
    input: ReplaceActiveFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Replace the entire content of the file currently open in Obsidian."""
    services = get_services(ctx)
    try:
        await services.client.replace_active_file(input.content, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("replacing active file", exc) from exc

    return {"vault": target_vault(services, input.vault), "status": "replaced"}


@mcp.tool()
async def patch_active_file(
    input: PatchActiveFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Apply line-based insertions, deletions and replacements to the active file.

    The file is read, patched locally and written back in full. Line numbers
    are 0-based and ranges inclusive. Deletions run first, replacements then
    address the text left after the deletions, and insertions the text left
    after the replacements. Each group runs from the bottom up.

    Args:
        input (PatchActiveFileInput): Validated input containing:
            - insertions (list, optional): {"line": int, "content": str}
            - deletions (list, optional): {"start_line": int, "end_line": int}
            - replacements (list, optional):
                {"start_line": int, "end_line": int, "content": str}
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {"vault": str, "status": "patched"}

    Examples:
        - Use when: Editing a few lines of the note the user is looking at
        - Don't use: Rewriting the whole note → Use replace_active_file()
    """
    services = get_services(ctx)
    try:
        current = await services.client.get_active_file(input.vault)
        patched = apply_line_patch(
            str(current),
            insertions=input.insertions,
            deletions=input.deletions,
            replacements=input.replacements,
        )
        await services.client.replace_active_file(patched, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("patching active file", exc) from exc

    return {"vault": target_vault(services, input.vault), "status": "patched"}


@mcp.tool()
async def delete_active_file(
    input: DeleteActiveFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Delete the file currently open in Obsidian."""
    services = get_services(ctx)
    try:
        await services.client.delete_active_file(input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("deleting active file", exc) from exc

    return {"vault": target_vault(services, input.vault), "status": "deleted"}

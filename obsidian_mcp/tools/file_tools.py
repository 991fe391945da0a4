"""MCP tools for vault files, directories and navigation.

This module provides MCP tool wrappers for:
- Reading, creating, appending to, replacing and deleting files
- Line-based patching of files
- Listing the vault root or a directory
- Opening a file in the Obsidian interface

Paths are relative to the vault root and include the extension.
"""

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_mcp.core.patching import apply_line_patch
from obsidian_mcp.errors import ObsidianMCPError
from obsidian_mcp.models import (
    AppendToFileInput,
    CreateFileInput,
    DeleteFileInput,
    GetFileInput,
    ListDirectoryInput,
    OpenFileInput,
    PatchFileInput,
)
from obsidian_mcp.server import mcp
from obsidian_mcp.session import get_services
from obsidian_mcp.tools.common import target_vault, tool_failure


def _directory_entries(listing: Any) -> list[Any]:
    """Extract the entries of a directory listing (``{"files": [...]}``)."""
    if isinstance(listing, dict):
        return list(listing.get("files", []))
    if isinstance(listing, list):
        return listing
    return []


# ==============================================================================
# READ OPERATIONS
# ==============================================================================


@mcp.tool()
async def get_file(
    input: GetFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Retrieve the content of a file in the vault.

    Args:
        input (GetFileInput): Validated input containing:
            - path (str): Path relative to the vault root, with extension
                Examples: "Daily Notes/2025-10-27.md", "Projects/Roadmap.md"
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {"vault": str, "path": str, "content": str}

    Examples:
        - Use when: Need the full text of a known note
        - Don't use: Looking for notes by content → Use simple_search()

    Error Handling:
        - ValidationError: Empty path or '.'/'..' segments
        - File not found → HTTP 404 error from the REST API
    """
    services = get_services(ctx)
    try:
        content = await services.client.get_file(input.path, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("getting file", exc) from exc

    return {"vault": target_vault(services, input.vault), "path": input.path, "content": content}


# ==============================================================================
# WRITE OPERATIONS
# ==============================================================================


@mcp.tool()
async def create_file(
    input: CreateFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Create a file with the given content, or replace it if it exists.

    Parent folders are created by Obsidian as needed.

    Returns:
        {"vault": str, "path": str, "status": "created"}
    """
    services = get_services(ctx)
    try:
        await services.client.create_file(input.path, input.content, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("creating file", exc) from exc

    return {"vault": target_vault(services, input.vault), "path": input.path, "status": "created"}


@mcp.tool()
async def append_to_file(
    input: AppendToFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Append content to the end of a file, creating the file if it is missing."""
    services = get_services(ctx)
    try:
        await services.client.append_to_file(input.path, input.content, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("appending to file", exc) from exc

    return {"vault": target_vault(services, input.vault), "path": input.path, "status": "appended"}


@mcp.tool()
async def replace_file(
    input: CreateFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Replace the entire content of a file."""
    services = get_services(ctx)
    try:
        await services.client.create_file(input.path, input.content, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("replacing file content", exc) from exc

    return {"vault": target_vault(services, input.vault), "path": input.path, "status": "replaced"}


@mcp.tool()
async def patch_file(
    input: PatchFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Apply line-based insertions, deletions and replacements to a file.

    The file is read, patched locally and written back in full. Line numbers
    are 0-based and ranges inclusive. Deletions run first, replacements then
    address the text left after the deletions, and insertions the text left
    after the replacements.

    Args:
        input (PatchFileInput): Validated input containing:
            - path (str): File to patch
            - insertions (list, optional): {"line": int, "content": str}
            - deletions (list, optional): {"start_line": int, "end_line": int}
            - replacements (list, optional):
                {"start_line": int, "end_line": int, "content": str}
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {"vault": str, "path": str, "status": "patched"}

    Examples:
        - Use when: Fixing a typo on line 12 → replacements
        - Use when: Adding a line under a heading you already located → insertions
        - Don't use: Rewriting the whole note → Use replace_file()

    Error Handling:
        - ValidationError: No operations given, or end_line before start_line
        - File not found → HTTP 404 error from the REST API
    """
    services = get_services(ctx)
    try:
        current = await services.client.get_file(input.path, input.vault)
        patched = apply_line_patch(
            str(current),
            insertions=input.insertions,
            deletions=input.deletions,
            replacements=input.replacements,
        )
        await services.client.create_file(input.path, patched, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("patching file", exc) from exc

    return {"vault": target_vault(services, input.vault), "path": input.path, "status": "patched"}


@mcp.tool()
async def delete_file(
    input: DeleteFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Delete a file from the vault. This cannot be undone."""
    services = get_services(ctx)
    try:
        await services.client.delete_file(input.path, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("deleting file", exc) from exc

    return {"vault": target_vault(services, input.vault), "path": input.path, "status": "deleted"}


# ==============================================================================
# DIRECTORIES
# ==============================================================================


@mcp.tool()
async def list_vault_files(
    input: ListDirectoryInput,
    ctx: Context,
) -> dict[str, Any]:
    """List files in the vault root or in a directory.

    Directory entries end with "/".

    Returns:
        {"path": str, "files": [str], "count": int}
    """
    services = get_services(ctx)
    try:
        listing = await services.client.list_directory(input.path, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("listing vault files", exc) from exc

    files = _directory_entries(listing)
    return {"path": input.path or "/", "files": files, "count": len(files)}


@mcp.tool()
async def list_directory(
    input: ListDirectoryInput,
    ctx: Context,
) -> dict[str, Any]:
    """List the contents of a directory in the vault.

    Returns:
        {"directory": str, "contents": [str], "count": int}
    """
    services = get_services(ctx)
    try:
        listing = await services.client.list_directory(input.path, input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("listing directory", exc) from exc

    contents = _directory_entries(listing)
    return {"directory": input.path or "/", "contents": contents, "count": len(contents)}


# ==============================================================================
# NAVIGATION
# ==============================================================================


@mcp.tool()
async def open_file(
    input: OpenFileInput,
    ctx: Context,
) -> dict[str, Any]:
    """Open a file in the Obsidian interface, optionally in a new leaf.

    Obsidian creates the file if it does not exist yet.

    Returns:
        {"vault": str, "path": str, "status": "opened", "newLeaf": bool | None}
    """
    services = get_services(ctx)
    try:
        await services.client.open_file(input.path, new_leaf=input.new_leaf, vault=input.vault)
    except ObsidianMCPError as exc:
        raise tool_failure("opening file", exc) from exc

    return {
        "vault": target_vault(services, input.vault),
        "path": input.path,
        "status": "opened",
        "newLeaf": input.new_leaf,
    }

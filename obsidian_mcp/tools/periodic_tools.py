"""MCP tools for periodic notes (daily, weekly, monthly, quarterly, yearly).

Requires the Periodic Notes plugin in the vault. Every tool targets the
current period unless a date is given.
"""

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_mcp.errors import ObsidianMCPError
from obsidian_mcp.models import (
    PatchPeriodicNoteInput,
    PeriodicNoteContentInput,
    PeriodicNoteInput,
)
from obsidian_mcp.server import mcp
from obsidian_mcp.session import get_services
from obsidian_mcp.tools.common import target_vault, tool_failure


def _note_payload(input: PeriodicNoteInput, vault: Any, **extra: Any) -> dict[str, Any]:
    payload = {
        "vault": vault,
        "period": input.period,
        "date": input.date.isoformat() if input.date else None,
    }
    payload.update(extra)
    return payload


@mcp.tool()
async def get_periodic_note(
    input: PeriodicNoteInput,
    ctx: Context,
) -> dict[str, Any]:
    """Get the content of a periodic note.

    Args:
        input (PeriodicNoteInput): Validated input containing:
            - period (str): daily, weekly, monthly, quarterly or yearly
            - date (str, optional): YYYY-MM-DD; omit for the current period
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {"vault": str, "period": str, "date": str | None, "content": str}

    Error Handling:
        - Note does not exist → HTTP 404 error from the REST API
    """
    services = get_services(ctx)
    try:
        content = await services.client.get_periodic_note(input.period, input.date, input.vault)
    except (ObsidianMCPError, ValueError) as exc:
        raise tool_failure(f"retrieving {input.period} note", exc) from exc

    return _note_payload(input, target_vault(services, input.vault), content=content)


@mcp.tool()
async def append_to_periodic_note(
    input: PeriodicNoteContentInput,
    ctx: Context,
) -> dict[str, Any]:
    """Append content to a periodic note, creating the note if it is missing."""
    services = get_services(ctx)
    try:
        await services.client.append_to_periodic_note(
            input.period, input.content, input.date, input.vault
        )
    except (ObsidianMCPError, ValueError) as exc:
        raise tool_failure(f"appending to {input.period} note", exc) from exc

    return _note_payload(input, target_vault(services, input.vault), status="appended")


@mcp.tool()
async def replace_periodic_note(
    input: PeriodicNoteContentInput,
    ctx: Context,
) -> dict[str, Any]:
    """Replace the entire content of a periodic note."""
    services = get_services(ctx)
    try:
        await services.client.replace_periodic_note(
            input.period, input.content, input.date, input.vault
        )
    except (ObsidianMCPError, ValueError) as exc:
        raise tool_failure(f"replacing {input.period} note", exc) from exc

    return _note_payload(input, target_vault(services, input.vault), status="replaced")


@mcp.tool()
async def patch_periodic_note(
    input: PatchPeriodicNoteInput,
    ctx: Context,
) -> dict[str, Any]:
    """Insert content relative to a heading, block reference or frontmatter field.

    Args:
        input (PatchPeriodicNoteInput): Validated input containing:
            - period (str): daily, weekly, monthly, quarterly or yearly
            - operation (str): append, prepend or replace
            - target_type (str): heading, block or frontmatter
            - target (str): Heading text, block ID or frontmatter field
                Nested headings are joined with "::", e.g. "Log::Morning"
            - content (str): Content to insert
            - create_target_if_missing (bool, optional)
            - date (str, optional): YYYY-MM-DD; omit for the current period
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {"vault": str, "period": str, "date": str | None, "status": "patched",
         "operation": str, "targetType": str, "target": str}

    Examples:
        - Use when: Adding a task under "Tasks" in today's daily note
        - Use when: Setting a frontmatter field such as "mood"

    Error Handling:
        - Target not found → HTTP 400 error from the REST API
    """
    services = get_services(ctx)
    try:
        await services.client.patch_periodic_note(
            input.period,
            input.operation,
            input.target_type,
            input.target,
            input.content,
            create_target_if_missing=input.create_target_if_missing,
            note_date=input.date,
            vault=input.vault,
        )
    except (ObsidianMCPError, ValueError) as exc:
        raise tool_failure(f"patching {input.period} note", exc) from exc

    return _note_payload(
        input,
        target_vault(services, input.vault),
        status="patched",
        operation=input.operation,
        targetType=input.target_type,
        target=input.target,
    )


@mcp.tool()
async def delete_periodic_note(
    input: PeriodicNoteInput,
    ctx: Context,
) -> dict[str, Any]:
    """Delete a periodic note."""
    services = get_services(ctx)
    try:
        await services.client.delete_periodic_note(input.period, input.date, input.vault)
    except (ObsidianMCPError, ValueError) as exc:
        raise tool_failure(f"deleting {input.period} note", exc) from exc

    return _note_payload(input, target_vault(services, input.vault), status="deleted")

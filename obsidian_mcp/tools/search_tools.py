"""MCP tools for searching vault content.

- search_vault: Dataview DQL or JsonLogic queries (requires the Dataview
  plugin for DQL)
- simple_search: plain text search with context around each match
"""

from typing import Any

from mcp.server.fastmcp import Context

from obsidian_mcp.errors import ObsidianMCPError
from obsidian_mcp.models import SearchVaultInput, SimpleSearchInput
from obsidian_mcp.server import mcp
from obsidian_mcp.session import get_services
from obsidian_mcp.tools.common import result_count, target_vault, tool_failure


@mcp.tool()
async def search_vault(
    input: SearchVaultInput,
    ctx: Context,
) -> dict[str, Any]:
    """Search the vault with a Dataview DQL or JsonLogic query.

    Dataview queries must be TABLE queries; LIST and TASK queries are not
    supported by the REST API. Read the dataview-query-examples resource for
    query patterns.

    Args:
        input (SearchVaultInput): Validated input containing:
            - query (str): DQL text, or a JSON document for JsonLogic
                Examples: 'TABLE file.mtime FROM "Projects" SORT file.mtime DESC'
                          '{"glob": ["Daily Notes/*.md", {"var": "path"}]}'
            - query_type ("dataview" | "jsonlogic"): Defaults to "dataview"
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "results": [{"filename": str, "result": Any}],
            "queryType": str,
            "vault": str,
            "resultCount": int | "unknown"
        }

    Error Handling:
        - ValidationError: Empty query or invalid JSON for JsonLogic
        - Query rejected by the server → HTTP 400 error with its message
    """
    services = get_services(ctx)
    try:
        results = await services.client.search_vault(
            input.request_body(),
            query_type=input.query_type,
            vault=input.vault,
        )
    except (ObsidianMCPError, ValueError) as exc:
        raise tool_failure("executing search", exc) from exc

    return {
        "results": results,
        "queryType": input.query_type,
        "vault": target_vault(services, input.vault),
        "resultCount": result_count(results),
    }


@mcp.tool()
async def simple_search(
    input: SimpleSearchInput,
    ctx: Context,
) -> dict[str, Any]:
    """Basic text search across all files in the vault.

    Returns matching files with the surrounding context of each match.

    Returns:
        {"results": list, "query": str, "contextLength": int | None,
         "vault": str, "resultCount": int | "unknown"}
    """
    services = get_services(ctx)
    try:
        results = await services.client.simple_search(
            input.query,
            context_length=input.context_length,
            vault=input.vault,
        )
    except ObsidianMCPError as exc:
        raise tool_failure("executing simple search", exc) from exc

    return {
        "results": results,
        "query": input.query,
        "contextLength": input.context_length,
        "vault": target_vault(services, input.vault),
        "resultCount": result_count(results),
    }

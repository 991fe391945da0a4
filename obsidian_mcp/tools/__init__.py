"""MCP tool definitions for Obsidian Local REST API operations.

This module imports all tool submodules to register them with the MCP server.
Each tool module uses the @mcp.tool() decorator to auto-register its tools.
"""

# Import all tool modules to register their @mcp.tool() decorated functions
from obsidian_mcp.tools import vault_tools
from obsidian_mcp.tools import system_tools
from obsidian_mcp.tools import active_file_tools
from obsidian_mcp.tools import file_tools
from obsidian_mcp.tools import search_tools
from obsidian_mcp.tools import periodic_tools

__all__ = [
    "vault_tools",
    "system_tools",
    "active_file_tools",
    "file_tools",
    "search_tools",
    "periodic_tools",
]

"""Obsidian MCP Server

Multi-vault access to the Obsidian Local REST API via Model Context Protocol.
"""

from obsidian_mcp.client import ObsidianClient
from obsidian_mcp.config import Settings, load_settings
from obsidian_mcp.data_models import VaultCollection, VaultConfig, VaultSummary
from obsidian_mcp.registry import VaultRegistry
from obsidian_mcp.store import VaultStore
from obsidian_mcp.server import mcp, run_server

# Import tools and resources to register them with the MCP server
from obsidian_mcp import tools  # noqa: F401
from obsidian_mcp import resources  # noqa: F401

__version__ = "0.1.0"
__all__ = [
    "ObsidianClient",
    "Settings",
    "load_settings",
    "VaultCollection",
    "VaultConfig",
    "VaultSummary",
    "VaultRegistry",
    "VaultStore",
    "mcp",
    "run_server",
]

"""FastMCP server initialization, lifespan and entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from obsidian_mcp.config import Settings, load_settings
from obsidian_mcp.session import ServerServices, build_services

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Send logs to stderr and, when configured, to a log file.

    stdout is reserved for the stdio transport.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT, handlers=handlers, force=True)


@asynccontextmanager
async def server_lifespan(server: FastMCP) -> AsyncIterator[ServerServices]:
    """Build the vault registry and client once for the server's lifetime."""
    services = build_services(load_settings())
    await services.registry.initialize()

    logger.info("Vault configuration: %s", services.registry.config_path)
    vaults = await services.registry.list_vaults()
    if vaults:
        logger.info("Configured vaults: %s", ", ".join(vault.name for vault in vaults))
        if services.registry.active_vault_name:
            logger.info("Active vault: %s", services.registry.active_vault_name)
    else:
        logger.info("No vaults configured. Use the add_vault tool to add one.")

    yield services


# Initialize FastMCP server
mcp = FastMCP("obsidian-mcp", lifespan=server_lifespan)

# Tool and resource modules are imported in __init__.py to register their decorators


def run_server() -> None:
    """Start the MCP server with stdio transport."""
    configure_logging(load_settings())
    logger.info("Starting Obsidian MCP Server")
    mcp.run(transport="stdio")


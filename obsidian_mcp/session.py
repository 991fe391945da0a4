"""Per-process services shared by all tool calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx
from mcp.server.fastmcp import Context

from obsidian_mcp.client import ObsidianClient
from obsidian_mcp.config import Settings
from obsidian_mcp.registry import VaultRegistry
from obsidian_mcp.store import VaultStore


@dataclass
class ServerServices:
    """The registry and client built from one :class:`Settings` instance."""

    settings: Settings
    registry: VaultRegistry
    client: ObsidianClient


def build_services(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ServerServices:
    """Wire the store, registry and client for ``settings``.

    Args:
        settings: Process settings.
        transport: Optional httpx transport, used by tests to stub the REST API.

    Returns:
        A :class:`ServerServices` whose registry has not been loaded yet.
    """
    registry = VaultRegistry(VaultStore(settings.vaults_file))
    client = ObsidianClient(
        registry,
        timeout=settings.request_timeout,
        verify_ssl=settings.verify_ssl,
        transport=transport,
    )
    return ServerServices(settings=settings, registry=registry, client=client)


def get_services(ctx: Context) -> ServerServices:
    """Return the services created by the server lifespan for this request.

    Args:
        ctx: The request context supplied by FastMCP.
    """
    return ctx.request_context.lifespan_context

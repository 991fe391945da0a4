"""Shared fixtures: temporary vault file, stubbed REST API and tool context."""

from types import SimpleNamespace
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

from obsidian_mcp.client import ObsidianClient
from obsidian_mcp.config import Settings
from obsidian_mcp.registry import VaultRegistry
from obsidian_mcp.session import ServerServices
from obsidian_mcp.store import VaultStore

Route = Callable[[httpx.Request], httpx.Response]


class FakeRestAPI:
    """In-process stand-in for one or more Obsidian Local REST API servers.

    Routes are keyed by ``(method, raw path)`` where the raw path keeps its
    percent-encoding, e.g. ``("GET", "/vault/Notes%2Ftoday.md")``. Requests
    without a route answer ``GET /`` with server info and everything else
    with an empty 204.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Route] = {}
        self.unreachable_hosts: set[str] = set()

    def add(self, method: str, path: str, response: Route) -> None:
        self.routes[(method.upper(), path)] = response

    def json(self, method: str, path: str, payload: Any, status: int = 200) -> None:
        self.add(method, path, lambda request: httpx.Response(status, json=payload))

    def text(self, method: str, path: str, body: str, status: int = 200) -> None:
        self.add(
            method,
            path,
            lambda request: httpx.Response(
                status, text=body, headers={"content-type": "text/markdown"}
            ),
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def handle(self, request: httpx.Request) -> httpx.Response:
        if request.url.host in self.unreachable_hosts:
            raise httpx.ConnectError("Connection refused", request=request)

        self.requests.append(request)
        path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        route = self.routes.get((request.method, path))
        if route is None:
            if request.method == "GET" and path == "/":
                return httpx.Response(200, json={"status": "OK", "service": "Obsidian Local REST API"})
            return httpx.Response(204)
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def vaults_file(tmp_path):
    return tmp_path / "vaults.json"


@pytest.fixture
def store(vaults_file):
    return VaultStore(vaults_file)


@pytest.fixture
def registry(store):
    return VaultRegistry(store)


@pytest.fixture
def api():
    return FakeRestAPI()


@pytest.fixture
def client(registry, api):
    return ObsidianClient(registry, timeout=5.0, transport=api.transport)


@pytest.fixture
def services(tmp_path, registry, client):
    return ServerServices(settings=Settings(config_dir=tmp_path), registry=registry, client=client)


@pytest.fixture
def ctx(services):
    """Minimal stand-in for the FastMCP request context seen by tools."""
    return SimpleNamespace(request_context=SimpleNamespace(lifespan_context=services))


@pytest_asyncio.fixture
async def work_vault(registry):
    """A registry holding one active vault named 'work'."""
    await registry.add_vault("work", "work-api-key-123", "http://work.local:27123", set_as_active=True)
    return "work"

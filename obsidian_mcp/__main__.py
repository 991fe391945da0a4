"""Allow ``python -m obsidian_mcp``."""

from obsidian_mcp.server import run_server

run_server()

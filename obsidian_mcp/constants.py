"""Module-level constants for the Obsidian MCP server."""

from pathlib import Path

# Configuration
CONFIG_DIR = Path.home() / ".config" / "obsidian-mcp"
VAULTS_FILENAME = "vaults.json"
SETTINGS_FILENAME = "settings.yaml"

# Obsidian Local REST API defaults
DEFAULT_BASE_URL = "http://localhost:27123"
DEFAULT_PORT = 27123
DEFAULT_REQUEST_TIMEOUT = 30.0

# Content types understood by the REST API
JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"
MARKDOWN_CONTENT_TYPE = "text/markdown"
DATAVIEW_CONTENT_TYPE = "application/vnd.olrapi.dataview.dql+txt"
JSONLOGIC_CONTENT_TYPE = "application/vnd.olrapi.jsonlogic+json"

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
PERIODS = ("daily", "weekly", "monthly", "quarterly", "yearly")

# Logging
LOG_LEVEL = "INFO"

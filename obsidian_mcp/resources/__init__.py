"""Static markdown references served as MCP resources.

The documents live next to this module as package data:
- dataview-query-examples.md: TABLE query patterns for search_vault
- templater-examples.md: Templater plugin quick reference
"""

import logging
from pathlib import Path

from obsidian_mcp.server import mcp

logger = logging.getLogger(__name__)

_RESOURCE_DIR = Path(__file__).parent

DATAVIEW_EXAMPLES_URI = "file://dataview-query-examples/"
TEMPLATER_EXAMPLES_URI = "file://templater-examples/"


def read_resource_text(filename: str) -> str:
    """Return the text of a bundled markdown document.

    Raises:
        FileNotFoundError: If the package was installed without its data files.
    """
    path = _RESOURCE_DIR / filename
    logger.debug("Reading resource %s", path)
    return path.read_text(encoding="utf-8")


@mcp.resource(
    DATAVIEW_EXAMPLES_URI,
    name="Dataview Query Examples",
    description="Examples of Dataview TABLE queries for the search_vault tool",
    mime_type="text/markdown",
)
def dataview_query_examples() -> str:
    return read_resource_text("dataview-query-examples.md")


@mcp.resource(
    TEMPLATER_EXAMPLES_URI,
    name="Templater Quick Reference",
    description="Quick reference and examples for the Obsidian Templater plugin",
    mime_type="text/markdown",
)
def templater_examples() -> str:
    return read_resource_text("templater-examples.md")

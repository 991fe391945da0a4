"""REST API path construction for vault files, commands and periodic notes."""

from __future__ import annotations

from datetime import date
from typing import Optional
from urllib.parse import quote

from obsidian_mcp.constants import PERIODS

# Characters left alone by JavaScript's encodeURIComponent besides [A-Za-z0-9-_.~]
_SEGMENT_SAFE = "!*'()"


def encode_segment(value: str) -> str:
    """Percent-encode ``value`` as a single URL path segment.

    Slashes are encoded too, so ``"notes/today.md"`` becomes
    ``"notes%2Ftoday.md"``; the REST API decodes it back into a vault path.

    Examples:
        >>> encode_segment("file with spaces & symbols!.md")
        'file%20with%20spaces%20%26%20symbols!.md'
    """
    return quote(value, safe=_SEGMENT_SAFE)


def join_url(base_url: str, endpoint: str) -> str:
    """Join a vault base URL and a REST endpoint with exactly one slash.

    One trailing slash is dropped from ``base_url``; a leading slash is added
    to ``endpoint`` when missing.

    Examples:
        >>> join_url("http://localhost:27123", "endpoint-without-slash")
        'http://localhost:27123/endpoint-without-slash'
        >>> join_url("http://localhost:27123/", "/vault/")
        'http://localhost:27123/vault/'
    """
    base = base_url[:-1] if base_url.endswith("/") else base_url
    path = endpoint if endpoint.startswith("/") else f"/{endpoint}"
    return f"{base}{path}"


def vault_file_path(file_path: str) -> str:
    """Endpoint for a single file inside the vault."""
    return f"/vault/{encode_segment(file_path)}"


def vault_directory_path(directory: str = "") -> str:
    """Endpoint listing a directory; the vault root when ``directory`` is empty."""
    cleaned = directory.strip("/")
    if not cleaned:
        return "/vault/"
    return f"/vault/{encode_segment(cleaned)}/"


def open_file_path(file_path: str) -> str:
    return f"/open/{encode_segment(file_path)}"


def command_path(command_id: str) -> str:
    return f"/commands/{encode_segment(command_id)}/"


def periodic_note_path(period: str, note_date: Optional[date] = None) -> str:
    """Endpoint for a periodic note.

    Args:
        period: One of ``daily``, ``weekly``, ``monthly``, ``quarterly``, ``yearly``.
        note_date: Date the note covers; the current period when omitted.

    Returns:
        ``/periodic/<period>/`` or ``/periodic/<period>/<yyyy>/<mm>/<dd>/``.

    Raises:
        ValueError: If ``period`` is not a known period.
    """
    if period not in PERIODS:
        raise ValueError(f"Unknown period '{period}'. Expected one of: {', '.join(PERIODS)}")
    if note_date is None:
        return f"/periodic/{period}/"
    return f"/periodic/{period}/{note_date.year:04d}/{note_date.month:02d}/{note_date.day:02d}/"

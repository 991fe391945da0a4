"""HTTP client for the Obsidian Local REST API of the configured vaults."""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Mapping, Optional

import httpx

from obsidian_mcp.constants import (
    BODY_METHODS,
    DATAVIEW_CONTENT_TYPE,
    DEFAULT_REQUEST_TIMEOUT,
    JSON_CONTENT_TYPE,
    JSONLOGIC_CONTENT_TYPE,
    MARKDOWN_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
)
from obsidian_mcp.core.paths import (
    command_path,
    encode_segment,
    join_url,
    open_file_path,
    periodic_note_path,
    vault_directory_path,
    vault_file_path,
)
from obsidian_mcp.data_models import VaultConfig
from obsidian_mcp.errors import NoActiveVaultError, ObsidianAPIError, ObsidianMCPError, VaultConnectionError
from obsidian_mcp.registry import VaultRegistry

logger = logging.getLogger(__name__)


def _encode_body(body: Any) -> str | bytes:
    if isinstance(body, (str, bytes)):
        return body
    return json.dumps(body)


def _read_payload(response: httpx.Response) -> Any:
    """Decode the body as JSON when the server says it is JSON, else as text."""
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return response.json()
        except ValueError:
            logger.warning(
                "Response from %s declared JSON but could not be decoded; returning raw text",
                response.request.url,
            )
    return response.text


class ObsidianClient:
    """Resolves a vault and performs one HTTP round trip against it.

    Every call picks its vault at request time: the named vault when one is
    given, otherwise the registry's active vault. Failures are reported as
    :class:`VaultConnectionError` when the vault could not be reached and as
    :class:`ObsidianAPIError` when it answered with a non-success status.
    Nothing is retried.
    """

    def __init__(
        self,
        registry: VaultRegistry,
        *,
        timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._registry = registry
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._transport = transport

    async def _resolve(self, vault: Optional[str]) -> tuple[str, VaultConfig]:
        if vault:
            return vault, await self._registry.get_vault(vault)

        config = await self._registry.get_active_vault()
        if config is None:
            raise NoActiveVaultError()
        return self._registry.active_vault_name or config.name, config

    async def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        vault: Optional[str] = None,
    ) -> Any:
        """Send one request to a vault's REST API.

        Args:
            endpoint: Path relative to the vault's base URL, e.g. ``/vault/``.
            method: HTTP method.
            body: Request body, sent only for POST, PUT and PATCH. Strings and
                bytes are sent as-is; other values are JSON encoded.
            headers: Extra headers. They override the defaults, including
                ``Content-Type``.
            params: Query string parameters. ``None`` values are dropped.
            vault: Vault name; the active vault is used when omitted.

        Returns:
            Parsed JSON (dict or list) when the response is JSON, otherwise the
            response text.

        Raises:
            VaultNotFoundError: If ``vault`` names an unknown vault.
            NoActiveVaultError: If ``vault`` is omitted and no vault is active.
            VaultConnectionError: If the request could not be delivered.
            ObsidianAPIError: If the API answered with a non-2xx status.
        """
        vault_name, config = await self._resolve(vault)

        method = method.upper()
        url = join_url(config.base_url, endpoint)
        content = None
        if method in BODY_METHODS and body is not None:
            content = _encode_body(body)

        query = {key: value for key, value in (params or {}).items() if value is not None}

        logger.debug("%s %s (vault '%s')", method, url, vault_name)
        try:
            # httpx only accepts ASCII header values
            request_headers = httpx.Headers(
                {
                    "Authorization": f"Bearer {config.api_key}",
                    "Content-Type": JSON_CONTENT_TYPE,
                }
            )
            if headers:
                request_headers.update(headers)

            async with httpx.AsyncClient(
                timeout=self._timeout,
                verify=self._verify_ssl,
                transport=self._transport,
            ) as http:
                response = await http.request(
                    method,
                    url,
                    headers=request_headers,
                    content=content,
                    params=query or None,
                )
                payload = _read_payload(response)
        except (httpx.HTTPError, UnicodeEncodeError) as exc:
            logger.warning("Request to vault '%s' failed: %s", vault_name, exc)
            raise VaultConnectionError(vault_name, exc) from exc

        if not response.is_success:
            raise ObsidianAPIError(response.status_code, response.reason_phrase, payload)

        return payload

    async def test_connection(self, vault: Optional[str] = None) -> bool:
        """Return ``True`` if the vault answers ``GET /`` with a 2xx status.

        Never raises: any failure, including an unknown or missing vault,
        yields ``False``.
        """
        try:
            await self.request("/", vault=vault)
        except ObsidianMCPError as exc:
            logger.debug("Connection test for vault %r failed: %s", vault, exc)
            return False
        except Exception:
            logger.exception("Unexpected error while testing vault %r", vault)
            return False
        return True

    # ------------------------------------------------------------------
    # System
    # ------------------------------------------------------------------

    async def get_server_info(self, vault: Optional[str] = None) -> Any:
        return await self.request("/", vault=vault)

    async def get_api_certificate(self, vault: Optional[str] = None) -> Any:
        return await self.request("/obsidian-local-rest-api.crt", vault=vault)

    # ------------------------------------------------------------------
    # Active file
    # ------------------------------------------------------------------

    async def get_active_file(self, vault: Optional[str] = None) -> Any:
        return await self.request("/active/", vault=vault)

    async def append_to_active_file(self, content: str, vault: Optional[str] = None) -> Any:
        return await self.request(
            "/active/",
            method="POST",
            body=content,
            headers={"Content-Type": TEXT_CONTENT_TYPE},
            vault=vault,
        )

    async def replace_active_file(self, content: str, vault: Optional[str] = None) -> Any:
        return await self.request(
            "/active/",
            method="PUT",
            body=content,
            headers={"Content-Type": TEXT_CONTENT_TYPE},
            vault=vault,
        )

    async def delete_active_file(self, vault: Optional[str] = None) -> Any:
        return await self.request("/active/", method="DELETE", vault=vault)

    # ------------------------------------------------------------------
    # Vault files and directories
    # ------------------------------------------------------------------

    async def get_file(self, file_path: str, vault: Optional[str] = None) -> Any:
        return await self.request(vault_file_path(file_path), vault=vault)

    async def create_file(self, file_path: str, content: str, vault: Optional[str] = None) -> Any:
        """Create ``file_path`` or overwrite it if it already exists."""
        return await self.request(
            vault_file_path(file_path),
            method="PUT",
            body=content,
            headers={"Content-Type": TEXT_CONTENT_TYPE},
            vault=vault,
        )

    async def append_to_file(self, file_path: str, content: str, vault: Optional[str] = None) -> Any:
        return await self.request(
            vault_file_path(file_path),
            method="POST",
            body=content,
            headers={"Content-Type": TEXT_CONTENT_TYPE},
            vault=vault,
        )

    async def delete_file(self, file_path: str, vault: Optional[str] = None) -> Any:
        return await self.request(vault_file_path(file_path), method="DELETE", vault=vault)

    async def list_directory(self, directory: str = "", vault: Optional[str] = None) -> Any:
        """List a vault directory; the API answers ``{"files": [...]}``."""
        return await self.request(vault_directory_path(directory), vault=vault)

    async def open_file(
        self,
        file_path: str,
        new_leaf: Optional[bool] = None,
        vault: Optional[str] = None,
    ) -> Any:
        params = None if new_leaf is None else {"newLeaf": "true" if new_leaf else "false"}
        return await self.request(open_file_path(file_path), method="POST", params=params, vault=vault)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search_vault(
        self,
        query: Any,
        query_type: str = "dataview",
        vault: Optional[str] = None,
    ) -> Any:
        """Run a Dataview DQL (string) or JsonLogic (JSON value) query."""
        if query_type == "dataview":
            content_type = DATAVIEW_CONTENT_TYPE
        elif query_type == "jsonlogic":
            content_type = JSONLOGIC_CONTENT_TYPE
        else:
            raise ValueError(f"Unsupported query type '{query_type}'; use 'dataview' or 'jsonlogic'")

        return await self.request(
            "/search/",
            method="POST",
            body=query,
            headers={"Content-Type": content_type},
            vault=vault,
        )

    async def simple_search(
        self,
        query: str,
        context_length: Optional[int] = None,
        vault: Optional[str] = None,
    ) -> Any:
        return await self.request(
            "/search/simple/",
            method="POST",
            body="",
            headers={"Content-Type": TEXT_CONTENT_TYPE},
            params={"query": query, "contextLength": context_length},
            vault=vault,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def list_commands(self, vault: Optional[str] = None) -> Any:
        return await self.request("/commands/", vault=vault)

    async def execute_command(self, command_id: str, vault: Optional[str] = None) -> Any:
        return await self.request(command_path(command_id), method="POST", vault=vault)

    # ------------------------------------------------------------------
    # Periodic notes
    # ------------------------------------------------------------------

    async def get_periodic_note(
        self,
        period: str,
        note_date: Optional[date] = None,
        vault: Optional[str] = None,
    ) -> Any:
        return await self.request(periodic_note_path(period, note_date), vault=vault)

    async def append_to_periodic_note(
        self,
        period: str,
        content: str,
        note_date: Optional[date] = None,
        vault: Optional[str] = None,
    ) -> Any:
        return await self.request(
            periodic_note_path(period, note_date),
            method="POST",
            body=content,
            headers={"Content-Type": MARKDOWN_CONTENT_TYPE},
            vault=vault,
        )

    async def replace_periodic_note(
        self,
        period: str,
        content: str,
        note_date: Optional[date] = None,
        vault: Optional[str] = None,
    ) -> Any:
        return await self.request(
            periodic_note_path(period, note_date),
            method="PUT",
            body=content,
            headers={"Content-Type": MARKDOWN_CONTENT_TYPE},
            vault=vault,
        )

    async def patch_periodic_note(
        self,
        period: str,
        operation: str,
        target_type: str,
        target: str,
        content: str,
        create_target_if_missing: Optional[bool] = None,
        note_date: Optional[date] = None,
        vault: Optional[str] = None,
    ) -> Any:
        """Append, prepend or replace a heading, block or frontmatter field.

        The target travels in a header, so it is percent-encoded to survive
        non-ASCII heading text.
        """
        headers = {
            "Content-Type": MARKDOWN_CONTENT_TYPE,
            "Operation": operation,
            "Target-Type": target_type,
            "Target": encode_segment(target),
        }
        if create_target_if_missing is not None:
            headers["Create-Target-If-Missing"] = "true" if create_target_if_missing else "false"

        return await self.request(
            periodic_note_path(period, note_date),
            method="PATCH",
            body=content,
            headers=headers,
            vault=vault,
        )

    async def delete_periodic_note(
        self,
        period: str,
        note_date: Optional[date] = None,
        vault: Optional[str] = None,
    ) -> Any:
        return await self.request(periodic_note_path(period, note_date), method="DELETE", vault=vault)

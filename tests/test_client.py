"""Tests for ObsidianClient against a stubbed REST API."""

import json
from datetime import date

import httpx
import pytest

from obsidian_mcp.client import ObsidianClient
from obsidian_mcp.errors import (
    ErrorKind,
    NoActiveVaultError,
    ObsidianAPIError,
    VaultConnectionError,
    VaultNotFoundError,
)


class TestVaultResolution:
    """Which vault a request goes to."""

    @pytest.mark.asyncio
    async def test_uses_active_vault_by_default(self, client, api, work_vault):
        await client.request("/")
        assert api.last.url.host == "work.local"

    @pytest.mark.asyncio
    async def test_named_vault_overrides_active(self, client, api, registry, work_vault):
        await registry.add_vault("home", "home-key", "http://home.local:27124")

        await client.request("/", vault="home")

        assert api.last.url.host == "home.local"
        assert api.last.url.port == 27124
        assert api.last.headers["Authorization"] == "Bearer home-key"

    @pytest.mark.asyncio
    async def test_no_active_vault(self, client, api, registry):
        await registry.add_vault("work", "key")

        with pytest.raises(NoActiveVaultError) as exc_info:
            await client.request("/")

        assert exc_info.value.kind is ErrorKind.NO_ACTIVE_VAULT
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_unknown_vault(self, client, api, work_vault):
        with pytest.raises(VaultNotFoundError):
            await client.request("/", vault="missing")
        assert api.requests == []


class TestRequestShape:
    """URL, headers and body of outgoing requests."""

    @pytest.mark.asyncio
    async def test_endpoint_without_leading_slash(self, client, api, work_vault):
        await client.request("endpoint-without-slash")
        assert str(api.last.url) == "http://work.local:27123/endpoint-without-slash"

    @pytest.mark.asyncio
    async def test_trailing_slash_on_base_url(self, client, api, registry):
        await registry.add_vault("slash", "key", "http://slash.local:27123/", set_as_active=True)
        await client.request("/vault/")
        assert str(api.last.url) == "http://slash.local:27123/vault/"

    @pytest.mark.asyncio
    async def test_default_headers(self, client, api, work_vault):
        await client.request("/")
        assert api.last.headers["Authorization"] == "Bearer work-api-key-123"
        assert api.last.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_caller_headers_override_defaults(self, client, api, work_vault):
        await client.request(
            "/active/",
            method="PUT",
            body="text",
            headers={"content-type": "text/plain", "X-Extra": "1"},
        )
        assert api.last.headers.get_list("Content-Type") == ["text/plain"]
        assert api.last.headers["X-Extra"] == "1"

    @pytest.mark.asyncio
    async def test_string_body_sent_verbatim(self, client, api, work_vault):
        await client.request("/active/", method="POST", body="# Heading\n")
        assert api.last.content == b"# Heading\n"

    @pytest.mark.asyncio
    async def test_structured_body_json_encoded(self, client, api, work_vault):
        await client.request("/search/", method="POST", body={"glob": ["*.md", {"var": "path"}]})
        assert json.loads(api.last.content) == {"glob": ["*.md", {"var": "path"}]}

    @pytest.mark.asyncio
    async def test_body_ignored_for_get_and_delete(self, client, api, work_vault):
        await client.request("/active/", method="GET", body="ignored")
        assert api.last.content == b""
        await client.request("/active/", method="delete", body="ignored")
        assert api.last.method == "DELETE"
        assert api.last.content == b""

    @pytest.mark.asyncio
    async def test_none_params_dropped(self, client, api, work_vault):
        await client.request("/search/simple/", method="POST", body="", params={"query": "x", "contextLength": None})
        assert dict(api.last.url.params) == {"query": "x"}


class TestResponses:
    """Response decoding and error classification."""

    @pytest.mark.asyncio
    async def test_json_response_is_parsed(self, client, api, work_vault):
        api.json("GET", "/vault/", {"files": ["a.md", "Projects/"]})
        assert await client.request("/vault/") == {"files": ["a.md", "Projects/"]}

    @pytest.mark.asyncio
    async def test_text_response_is_returned_as_text(self, client, api, work_vault):
        api.text("GET", "/active/", "# Today\n- item")
        assert await client.request("/active/") == "# Today\n- item"

    @pytest.mark.asyncio
    async def test_malformed_json_falls_back_to_text(self, client, api, work_vault):
        api.add(
            "GET",
            "/broken/",
            lambda request: httpx.Response(
                200, content=b"{not json", headers={"content-type": "application/json"}
            ),
        )
        assert await client.request("/broken/") == "{not json"

    @pytest.mark.asyncio
    async def test_undecodable_json_error_body_raises_api_error(self, client, api, work_vault):
        api.add(
            "GET",
            "/broken/",
            lambda request: httpx.Response(
                500, content=b'{"message": "\xff"}', headers={"content-type": "application/json"}
            ),
        )
        with pytest.raises(ObsidianAPIError) as exc_info:
            await client.request("/broken/")
        assert exc_info.value.status == 500
        assert exc_info.value.response.startswith('{"message": ')

    @pytest.mark.asyncio
    async def test_error_status_raises_api_error(self, client, api, work_vault):
        api.json("GET", "/vault/missing.md", {"errorCode": 40400, "message": "File not found"}, status=404)

        with pytest.raises(ObsidianAPIError) as exc_info:
            await client.request("/vault/missing.md")

        error = exc_info.value
        assert error.kind is ErrorKind.REMOTE_API
        assert error.status == 404
        assert error.status_text == "Not Found"
        assert str(error) == "HTTP 404: Not Found"
        assert error.response == {"errorCode": 40400, "message": "File not found"}

    @pytest.mark.asyncio
    async def test_error_status_with_text_body(self, client, api, work_vault):
        api.text("POST", "/search/", "Bad query", status=400)
        with pytest.raises(ObsidianAPIError) as exc_info:
            await client.request("/search/", method="POST", body="TABLE")
        assert exc_info.value.response == "Bad query"

    @pytest.mark.asyncio
    async def test_transport_failure_raises_connection_error(self, client, api, work_vault):
        api.unreachable_hosts.add("work.local")

        with pytest.raises(VaultConnectionError) as exc_info:
            await client.request("/")

        error = exc_info.value
        assert error.kind is ErrorKind.VAULT_CONNECTION
        assert error.vault_name == "work"
        assert isinstance(error.cause, httpx.ConnectError)
        assert str(error).startswith("Failed to connect to vault 'work':")

    @pytest.mark.asyncio
    async def test_non_ascii_header_raises_connection_error(self, client, api, work_vault):
        with pytest.raises(VaultConnectionError) as exc_info:
            await client.request("/", headers={"Target": "Caf\u00e9"})
        assert isinstance(exc_info.value.cause, UnicodeEncodeError)
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_timeout_raises_connection_error(self, registry, work_vault):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = ObsidianClient(registry, transport=httpx.MockTransport(slow))

        with pytest.raises(VaultConnectionError):
            await client.request("/")


class TestConnection:
    """Test suite for test_connection."""

    @pytest.mark.asyncio
    async def test_reachable(self, client, work_vault):
        assert await client.test_connection() is True

    @pytest.mark.asyncio
    async def test_unreachable(self, client, api, work_vault):
        api.unreachable_hosts.add("work.local")
        assert await client.test_connection("work") is False

    @pytest.mark.asyncio
    async def test_error_status(self, client, api, work_vault):
        api.json("GET", "/", {"message": "Unauthorized"}, status=401)
        assert await client.test_connection() is False

    @pytest.mark.asyncio
    async def test_unknown_or_missing_vault(self, client, registry):
        assert await client.test_connection("missing") is False
        assert await client.test_connection() is False


class TestRoutes:
    """The convenience wrappers build the documented REST routes."""

    @pytest.mark.asyncio
    async def test_file_paths_are_encoded_as_one_segment(self, client, api, work_vault):
        await client.get_file("Daily Notes/2025-10-27.md")
        assert api.last.url.raw_path == b"/vault/Daily%20Notes%2F2025-10-27.md"

    @pytest.mark.asyncio
    async def test_create_file_sends_text(self, client, api, work_vault):
        await client.create_file("Notes/new.md", "# New")
        assert api.last.method == "PUT"
        assert api.last.headers["Content-Type"] == "text/plain"
        assert api.last.content == b"# New"

    @pytest.mark.asyncio
    async def test_append_to_file(self, client, api, work_vault):
        await client.append_to_file("log.md", "entry")
        assert (api.last.method, api.last.url.raw_path) == ("POST", b"/vault/log.md")

    @pytest.mark.asyncio
    async def test_delete_file(self, client, api, work_vault):
        await client.delete_file("old.md")
        assert (api.last.method, api.last.url.raw_path) == ("DELETE", b"/vault/old.md")

    @pytest.mark.asyncio
    async def test_list_directory(self, client, api, work_vault):
        await client.list_directory()
        assert api.last.url.raw_path == b"/vault/"
        await client.list_directory("Projects/2025")
        assert api.last.url.raw_path == b"/vault/Projects%2F2025/"

    @pytest.mark.asyncio
    async def test_active_file_routes(self, client, api, work_vault):
        await client.append_to_active_file("more")
        assert (api.last.method, api.last.url.raw_path) == ("POST", b"/active/")
        assert api.last.headers["Content-Type"] == "text/plain"
        await client.delete_active_file()
        assert (api.last.method, api.last.url.raw_path) == ("DELETE", b"/active/")

    @pytest.mark.asyncio
    async def test_open_file_new_leaf(self, client, api, work_vault):
        await client.open_file("Notes/a.md", new_leaf=True)
        assert api.last.method == "POST"
        assert api.last.url.raw_path == b"/open/Notes%2Fa.md?newLeaf=true"

    @pytest.mark.asyncio
    async def test_open_file_without_new_leaf(self, client, api, work_vault):
        await client.open_file("a.md")
        assert api.last.url.raw_path == b"/open/a.md"

    @pytest.mark.asyncio
    async def test_dataview_search(self, client, api, work_vault):
        await client.search_vault('TABLE file.mtime FROM "Projects"')
        assert (api.last.method, api.last.url.raw_path) == ("POST", b"/search/")
        assert api.last.headers["Content-Type"] == "application/vnd.olrapi.dataview.dql+txt"
        assert api.last.content == b'TABLE file.mtime FROM "Projects"'

    @pytest.mark.asyncio
    async def test_jsonlogic_search(self, client, api, work_vault):
        await client.search_vault({"in": ["tag", {"var": "tags"}]}, query_type="jsonlogic")
        assert api.last.headers["Content-Type"] == "application/vnd.olrapi.jsonlogic+json"
        assert json.loads(api.last.content) == {"in": ["tag", {"var": "tags"}]}

    @pytest.mark.asyncio
    async def test_unsupported_query_type(self, client, work_vault):
        with pytest.raises(ValueError):
            await client.search_vault("x", query_type="sql")

    @pytest.mark.asyncio
    async def test_simple_search(self, client, api, work_vault):
        await client.simple_search("meeting notes", context_length=50)
        assert api.last.method == "POST"
        assert api.last.url.path == "/search/simple/"
        assert dict(api.last.url.params) == {"query": "meeting notes", "contextLength": "50"}
        assert api.last.content == b""

    @pytest.mark.asyncio
    async def test_commands(self, client, api, work_vault):
        await client.list_commands()
        assert api.last.url.raw_path == b"/commands/"
        await client.execute_command("editor:save-file")
        assert api.last.method == "POST"
        assert api.last.url.raw_path == b"/commands/editor%3Asave-file/"

    @pytest.mark.asyncio
    async def test_server_info_and_certificate(self, client, api, work_vault):
        await client.get_server_info()
        assert api.last.url.raw_path == b"/"
        await client.get_api_certificate()
        assert api.last.url.raw_path == b"/obsidian-local-rest-api.crt"

    @pytest.mark.asyncio
    async def test_periodic_note_current_period(self, client, api, work_vault):
        await client.get_periodic_note("daily")
        assert api.last.url.raw_path == b"/periodic/daily/"

    @pytest.mark.asyncio
    async def test_periodic_note_for_date(self, client, api, work_vault):
        await client.append_to_periodic_note("weekly", "- item", note_date=date(2024, 1, 5))
        assert api.last.method == "POST"
        assert api.last.url.raw_path == b"/periodic/weekly/2024/01/05/"
        assert api.last.headers["Content-Type"] == "text/markdown"

    @pytest.mark.asyncio
    async def test_patch_periodic_note_headers(self, client, api, work_vault):
        await client.patch_periodic_note(
            "daily",
            operation="append",
            target_type="heading",
            target="Tâches du jour",
            content="- [ ] review",
            create_target_if_missing=True,
        )

        request = api.last
        assert request.method == "PATCH"
        assert request.headers["Operation"] == "append"
        assert request.headers["Target-Type"] == "heading"
        assert request.headers["Target"] == "T%C3%A2ches%20du%20jour"
        assert request.headers["Create-Target-If-Missing"] == "true"
        assert request.content == b"- [ ] review"

    @pytest.mark.asyncio
    async def test_patch_periodic_note_omits_optional_header(self, client, api, work_vault):
        await client.patch_periodic_note("monthly", "replace", "frontmatter", "status", "done")
        assert "Create-Target-If-Missing" not in api.last.headers

    @pytest.mark.asyncio
    async def test_delete_periodic_note(self, client, api, work_vault):
        await client.delete_periodic_note("yearly", date(2023, 12, 31))
        assert (api.last.method, api.last.url.raw_path) == ("DELETE", b"/periodic/yearly/2023/12/31/")

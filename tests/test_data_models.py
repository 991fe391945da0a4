"""Tests for vault records, the collection invariant and error rendering."""

from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from obsidian_mcp.data_models import (
    VaultCollection,
    VaultConfig,
    VaultSummary,
    derive_port,
    mask_api_key,
)
from obsidian_mcp.errors import (
    ErrorKind,
    NoActiveVaultError,
    ObsidianAPIError,
    PersistenceError,
    VaultAlreadyExistsError,
    VaultConnectionError,
    VaultNotFoundError,
    describe_error,
)


def _vault(**overrides):
    values = {"api_key": "secret-api-key", "base_url": "http://localhost:27123", "name": "Work"}
    values.update(overrides)
    return VaultConfig(**values)


class TestVaultConfig:
    """Test suite for VaultConfig validation."""

    def test_accepts_aliases(self):
        vault = VaultConfig.model_validate(
            {"apiKey": "k", "baseUrl": "https://127.0.0.1:27124", "name": "n", "isActive": True}
        )
        assert vault.api_key == "k"
        assert vault.is_active is True

    def test_defaults(self):
        vault = _vault()
        assert vault.port == 27123
        assert vault.is_active is False
        assert vault.last_used is None

    @pytest.mark.parametrize("base_url", ["localhost:27123", "ftp://host", "http://", "", "http://host:notaport"])
    def test_rejects_invalid_base_url(self, base_url):
        with pytest.raises(ValidationError):
            _vault(base_url=base_url)

    @pytest.mark.parametrize("field", ["api_key", "name"])
    def test_rejects_blank_required_fields(self, field):
        with pytest.raises(ValidationError):
            _vault(**{field: "   "})

    @pytest.mark.parametrize("api_key", ["k\u00e9y-\u00fc", "key\nwith-newline", "tab\tkey"])
    def test_rejects_api_key_unusable_in_header(self, api_key):
        with pytest.raises(ValidationError) as exc_info:
            _vault(api_key=api_key)
        assert "printable ASCII" in str(exc_info.value)

    @pytest.mark.parametrize("port", [0, 65536])
    def test_rejects_out_of_range_port(self, port):
        with pytest.raises(ValidationError):
            _vault(port=port)

    def test_api_key_not_in_repr(self):
        assert "secret-api-key" not in repr(_vault())

    def test_masked_api_key(self):
        assert _vault().masked_api_key == "secr...-key"
        assert mask_api_key("short") == "*****"

    def test_derive_port(self):
        assert derive_port("http://localhost:27124") == 27124
        assert derive_port("https://example.com") == 27123


class TestMarkActive:
    """The active flags and pointer always change together."""

    def _collection(self):
        return VaultCollection(vaults={"a": _vault(name="A"), "b": _vault(name="B")}, default_vault="a")

    def test_activates_one_vault(self):
        collection = self._collection()
        collection.mark_active("a")
        collection.mark_active("b")
        assert collection.active_vault == "b"
        assert [vault.is_active for vault in collection.vaults.values()] == [False, True]

    def test_timestamp_only_when_given(self):
        collection = self._collection()
        collection.mark_active("a")
        assert collection.vaults["a"].last_used is None

        when = datetime(2024, 3, 1, tzinfo=timezone.utc)
        collection.mark_active("a", when)
        assert collection.vaults["a"].last_used == when

    def test_clear(self):
        collection = self._collection()
        collection.mark_active("a")
        collection.mark_active(None)
        assert collection.active_vault is None
        assert not any(vault.is_active for vault in collection.vaults.values())

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            self._collection().mark_active("zzz")

    def test_first_vault_name(self):
        assert self._collection().first_vault_name() == "a"
        assert VaultCollection().first_vault_name() is None


def test_summary_payload():
    when = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    summary = VaultSummary.from_config("work", _vault(is_active=True, last_used=when))
    assert summary.as_payload() == {
        "name": "work",
        "displayName": "Work",
        "baseUrl": "http://localhost:27123",
        "isActive": True,
        "lastUsed": "2024-01-15T10:30:00+00:00",
    }


class TestErrors:
    """Every error carries its kind and renders a user-facing message."""

    def test_kinds(self):
        assert VaultNotFoundError("x").kind is ErrorKind.VAULT_NOT_FOUND
        assert VaultAlreadyExistsError("x").kind is ErrorKind.VAULT_ALREADY_EXISTS
        assert NoActiveVaultError().kind is ErrorKind.NO_ACTIVE_VAULT
        assert VaultConnectionError("x", OSError("boom")).kind is ErrorKind.VAULT_CONNECTION
        assert ObsidianAPIError(500, "Internal Server Error").kind is ErrorKind.REMOTE_API
        assert PersistenceError(Path("v.json"), OSError("boom")).kind is ErrorKind.PERSISTENCE

    def test_describe_vault_not_found(self):
        assert describe_error(VaultNotFoundError("work")) == (
            "Vault 'work' not found. Use list_vaults to see available vaults."
        )

    def test_describe_already_exists(self):
        assert "Use remove_vault first" in describe_error(VaultAlreadyExistsError("work"))

    def test_describe_no_active_vault(self):
        assert "set_active_vault" in describe_error(NoActiveVaultError())

    def test_describe_api_error_includes_server_message(self):
        error = ObsidianAPIError(404, "Not Found", {"errorCode": 40400, "message": "File does not exist"})
        assert describe_error(error) == "HTTP 404: Not Found (File does not exist)"

    def test_describe_api_error_without_detail(self):
        assert describe_error(ObsidianAPIError(502, "Bad Gateway", None)) == "HTTP 502: Bad Gateway"

    def test_connection_error_without_message_uses_type(self):
        error = VaultConnectionError("work", TimeoutError())
        assert str(error) == "Failed to connect to vault 'work': TimeoutError"

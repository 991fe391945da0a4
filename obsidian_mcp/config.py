"""Server settings loading.

Settings are built once at process start and handed to the store, registry and
client explicitly. Nothing in the package reads them from module globals.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from obsidian_mcp.constants import (
    CONFIG_DIR,
    DEFAULT_REQUEST_TIMEOUT,
    LOG_LEVEL,
    SETTINGS_FILENAME,
    VAULTS_FILENAME,
)

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    """Process-wide settings for the server."""

    config_dir: Path
    log_level: str = LOG_LEVEL
    log_file: Optional[Path] = None
    request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT
    verify_ssl: bool = True

    @property
    def vaults_file(self) -> Path:
        """Location of the persisted vault registry."""
        return self.config_dir / VAULTS_FILENAME

    @property
    def settings_file(self) -> Path:
        return self.config_dir / SETTINGS_FILENAME


def _parse_log_level(value: Any) -> str:
    if not isinstance(value, str) or value.strip().upper() not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log_level {value!r}; expected one of {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return value.strip().upper()


def _parse_timeout(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ValueError(f"request_timeout must be a positive number or null, got {value!r}")
    return float(value)


def load_settings(
    config_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build :class:`Settings` from the optional YAML file and environment.

    Args:
        config_dir: Directory holding ``vaults.json`` and ``settings.yaml``.
            Defaults to ``OBSIDIAN_MCP_CONFIG_DIR`` or ``~/.config/obsidian-mcp``.
        environ: Environment mapping, ``os.environ`` when omitted.

    Returns:
        The resolved settings. Environment variables win over the YAML file.

    Raises:
        ValueError: If ``settings.yaml`` exists but holds invalid values.
    """
    env = os.environ if environ is None else environ

    if config_dir is None:
        raw_dir = env.get("OBSIDIAN_MCP_CONFIG_DIR")
        config_dir = Path(raw_dir).expanduser() if raw_dir else CONFIG_DIR

    settings_path = config_dir / SETTINGS_FILENAME
    raw_config: dict[str, Any] = {}
    if settings_path.exists():
        loaded = yaml.safe_load(settings_path.read_text(encoding="utf-8")) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Settings file {settings_path} must contain a mapping")
        raw_config = loaded
        logger.debug("Loaded settings from %s", settings_path)

    log_level = _parse_log_level(env.get("OBSIDIAN_MCP_LOG_LEVEL") or raw_config.get("log_level", LOG_LEVEL))

    raw_log_file = env.get("OBSIDIAN_MCP_LOG_FILE") or raw_config.get("log_file")
    if raw_log_file is not None and not isinstance(raw_log_file, str):
        raise ValueError("log_file must be a path string")
    log_file = Path(raw_log_file).expanduser() if raw_log_file else None

    request_timeout = _parse_timeout(raw_config.get("request_timeout", DEFAULT_REQUEST_TIMEOUT))

    verify_ssl = raw_config.get("verify_ssl", True)
    if not isinstance(verify_ssl, bool):
        raise ValueError("verify_ssl must be true or false")

    return Settings(
        config_dir=config_dir,
        log_level=log_level,
        log_file=log_file,
        request_timeout=request_timeout,
        verify_ssl=verify_ssl,
    )

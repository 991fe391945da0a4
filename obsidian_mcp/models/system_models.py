"""Pydantic input models for server information and command operations."""

from __future__ import annotations

from pydantic import Field, field_validator

from .base import BaseVaultInput


class ServerInfoInput(BaseVaultInput):
    """Input model for get_server_info and get_api_certificate tools."""


class ListCommandsInput(BaseVaultInput):
    """Input model for list_commands tool."""


class ExecuteCommandInput(BaseVaultInput):
    """Input model for execute_command tool.

    Examples:
        >>> ExecuteCommandInput(command_id="editor:save-file")
    """

    command_id: str = Field(
        min_length=1,
        description="ID of the command to execute. Use list_commands() to discover IDs.",
        examples=["editor:save-file", "app:reload"],
    )

    @field_validator("command_id")
    @classmethod
    def validate_command_id(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Command ID cannot be empty. Use list_commands() to find one.")
        return cleaned

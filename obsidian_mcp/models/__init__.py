"""Pydantic input models for MCP tool validation.

Each model is the input schema of one or more tools. Validation happens at the
tool boundary, before any vault is resolved or any request is sent.

Architecture:
- base: BaseVaultInput (optional vault) and BaseFileInput (adds a file path)
- vault_models: vault registry management
- system_models: server info, certificate and commands
- active_file_models: the file currently open in Obsidian
- file_models: vault files, line patches, directories and navigation
- search_models: Dataview/JsonLogic and simple text search
- periodic_models: daily, weekly, monthly, quarterly and yearly notes

Usage:
    from obsidian_mcp.models import GetFileInput, PatchFileInput
    from obsidian_mcp.models import AddVaultInput, VaultNameInput
"""

from .base import BaseFileInput, BaseVaultInput
from .vault_models import (
    AddVaultInput,
    GetActiveVaultInput,
    ListVaultsInput,
    VaultNameInput,
)
from .system_models import (
    ExecuteCommandInput,
    ListCommandsInput,
    ServerInfoInput,
)
from .active_file_models import (
    AppendToActiveFileInput,
    DeleteActiveFileInput,
    GetActiveFileInput,
    PatchActiveFileInput,
    ReplaceActiveFileInput,
)
from .file_models import (
    AppendToFileInput,
    CreateFileInput,
    DeleteFileInput,
    GetFileInput,
    LineDeletion,
    LineInsertion,
    LineReplacement,
    ListDirectoryInput,
    OpenFileInput,
    PatchFileInput,
)
from .search_models import SearchVaultInput, SimpleSearchInput
from .periodic_models import (
    PatchPeriodicNoteInput,
    PeriodicNoteContentInput,
    PeriodicNoteInput,
)

__all__ = [
    # Base models
    "BaseVaultInput",
    "BaseFileInput",
    # Vault models
    "ListVaultsInput",
    "GetActiveVaultInput",
    "VaultNameInput",
    "AddVaultInput",
    # System models
    "ServerInfoInput",
    "ListCommandsInput",
    "ExecuteCommandInput",
    # Active file models
    "GetActiveFileInput",
    "AppendToActiveFileInput",
    "ReplaceActiveFileInput",
    "PatchActiveFileInput",
    "DeleteActiveFileInput",
    # File models
    "LineInsertion",
    "LineDeletion",
    "LineReplacement",
    "GetFileInput",
    "CreateFileInput",
    "AppendToFileInput",
    "PatchFileInput",
    "DeleteFileInput",
    "ListDirectoryInput",
    "OpenFileInput",
    # Search models
    "SearchVaultInput",
    "SimpleSearchInput",
    # Periodic note models
    "PeriodicNoteInput",
    "PeriodicNoteContentInput",
    "PatchPeriodicNoteInput",
]

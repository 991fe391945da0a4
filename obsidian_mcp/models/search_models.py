"""Pydantic input models for search operations.

This module defines input models for:
- Advanced search with Dataview DQL or JsonLogic queries
- Simple full-text search
"""

from __future__ import annotations

import json
from typing import Any, Literal, Optional

from pydantic import Field, field_validator, model_validator

from .base import BaseVaultInput


class SearchVaultInput(BaseVaultInput):
    """Input model for search_vault tool.

    ``dataview`` queries are sent verbatim as DQL text. ``jsonlogic`` queries
    must be a JSON document and are validated here, before any request is made.

    Examples:
        >>> SearchVaultInput(query='TABLE file.mtime FROM "Projects"')
        >>> SearchVaultInput(query='{"glob": ["*.md", {"var": "path"}]}', query_type="jsonlogic")
    """

    query: str = Field(
        min_length=1,
        description=(
            "The search query. For Dataview, use TABLE-type DQL; see the "
            "dataview-query-examples resource. For JsonLogic, a JSON string "
            "using operators such as 'glob' and 'regexp'."
        ),
        examples=['TABLE file.mtime FROM "Projects" SORT file.mtime DESC'],
    )
    query_type: Literal["dataview", "jsonlogic"] = Field(
        "dataview",
        description="Query language: 'dataview' (DQL) or 'jsonlogic'.",
    )

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Search query cannot be empty.")
        return cleaned

    @model_validator(mode="after")
    def validate_jsonlogic(self) -> SearchVaultInput:
        if self.query_type == "jsonlogic":
            try:
                json.loads(self.query)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in JsonLogic query: {exc}") from exc
        return self

    def request_body(self) -> Any:
        """Return the body to send: DQL text, or the parsed JsonLogic document."""
        if self.query_type == "jsonlogic":
            return json.loads(self.query)
        return self.query


class SimpleSearchInput(BaseVaultInput):
    """Input model for simple_search tool."""

    query: str = Field(
        min_length=1,
        description="Term or phrase to find in vault files.",
        examples=["meeting notes", "TODO"],
    )
    context_length: Optional[int] = Field(
        None,
        ge=0,
        description="Characters of context around each match (server default when omitted).",
    )

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Search query cannot be empty.")
        return cleaned

"""Pydantic input models for periodic note operations."""

from __future__ import annotations

import datetime as dt
from typing import Literal, Optional

from pydantic import Field

from .base import BaseVaultInput

Period = Literal["daily", "weekly", "monthly", "quarterly", "yearly"]


class PeriodicNoteInput(BaseVaultInput):
    """Input model for get_periodic_note and delete_periodic_note tools.

    Examples:
        >>> PeriodicNoteInput(period="daily")
        >>> PeriodicNoteInput(period="weekly", date="2024-01-15")
    """

    period: Period = Field(description="Period of the note: daily, weekly, monthly, quarterly or yearly.")
    date: Optional[dt.date] = Field(
        None,
        description="Date the note covers (YYYY-MM-DD). Omit for the current period.",
        examples=["2024-01-15"],
    )


class PeriodicNoteContentInput(PeriodicNoteInput):
    """Input model for append_to_periodic_note and replace_periodic_note tools."""

    content: str = Field(description="Markdown content to append or to replace the note with.")


class PatchPeriodicNoteInput(PeriodicNoteInput):
    """Input model for patch_periodic_note tool.

    Targets a heading, a block reference or a frontmatter field of the note.

    Examples:
        >>> PatchPeriodicNoteInput(period="daily", operation="append",
        ...     target_type="heading", target="Tasks", content="- [ ] Review")
    """

    operation: Literal["append", "prepend", "replace"] = Field(
        description="Patch operation to perform on the target."
    )
    target_type: Literal["heading", "block", "frontmatter"] = Field(
        description="Kind of target: heading, block reference or frontmatter field."
    )
    target: str = Field(
        min_length=1,
        description="Heading name, block reference ID or frontmatter field name.",
        examples=["Tasks", "2d9b4a", "status"],
    )
    content: str = Field(description="Content to append, prepend or replace with.")
    create_target_if_missing: Optional[bool] = Field(
        None,
        description="Create the target if it does not exist (useful for frontmatter fields).",
    )

"""Line-based patching of note content."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from obsidian_mcp.models.file_models import LineDeletion, LineInsertion, LineReplacement


def apply_line_patch(
    content: str,
    insertions: Optional[Sequence[LineInsertion]] = None,
    deletions: Optional[Sequence[LineDeletion]] = None,
    replacements: Optional[Sequence[LineReplacement]] = None,
) -> str:
    """Apply line insertions, deletions and replacements to ``content``.

    Line numbers are 0-based and ranges are inclusive. Deletions run first,
    then replacements, then insertions; each group is applied from the bottom
    of the note upwards so edits within a group do not shift each other.

    Args:
        content: Current note text.
        insertions: Content inserted before ``line`` (a ``line`` equal to the
            line count appends).
        deletions: Inclusive line ranges to remove.
        replacements: Inclusive line ranges replaced by new content.

    Returns:
        The patched text, lines joined with ``\\n``.

    Examples:
        >>> apply_line_patch("a\\nb\\nc", deletions=[LineDeletion(start_line=1, end_line=1)])
        'a\\nc'
    """
    lines = content.split("\n")

    for deletion in sorted(deletions or (), key=lambda item: item.start_line, reverse=True):
        del lines[deletion.start_line : deletion.end_line + 1]

    for replacement in sorted(replacements or (), key=lambda item: item.start_line, reverse=True):
        lines[replacement.start_line : replacement.end_line + 1] = replacement.content.split("\n")

    for insertion in sorted(insertions or (), key=lambda item: item.line, reverse=True):
        lines[insertion.line : insertion.line] = insertion.content.split("\n")

    return "\n".join(lines)

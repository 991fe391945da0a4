"""Tests for line-based patch application."""

from obsidian_mcp.core.patching import apply_line_patch
from obsidian_mcp.models import LineDeletion, LineInsertion, LineReplacement

CONTENT = "line 0\nline 1\nline 2\nline 3\nline 4"


def test_no_operations_returns_content_unchanged():
    assert apply_line_patch(CONTENT) == CONTENT


def test_insertion_before_line():
    patched = apply_line_patch(CONTENT, insertions=[LineInsertion(line=1, content="new")])
    assert patched.split("\n") == ["line 0", "new", "line 1", "line 2", "line 3", "line 4"]


def test_insertion_at_end_appends():
    patched = apply_line_patch("a\nb", insertions=[LineInsertion(line=2, content="c")])
    assert patched == "a\nb\nc"


def test_multiline_insertion():
    patched = apply_line_patch("a\nb", insertions=[LineInsertion(line=1, content="x\ny")])
    assert patched == "a\nx\ny\nb"


def test_deletion_range_is_inclusive():
    patched = apply_line_patch(CONTENT, deletions=[LineDeletion(start_line=1, end_line=2)])
    assert patched == "line 0\nline 3\nline 4"


def test_replacement_with_more_lines():
    patched = apply_line_patch(
        CONTENT,
        replacements=[LineReplacement(start_line=2, end_line=2, content="two\nand a half")],
    )
    assert patched.split("\n") == ["line 0", "line 1", "two", "and a half", "line 3", "line 4"]


def test_operations_in_a_group_refer_to_original_lines():
    """Deleting lines 0 and 3 removes the original lines, whatever the input order."""
    patched = apply_line_patch(
        CONTENT,
        deletions=[
            LineDeletion(start_line=0, end_line=0),
            LineDeletion(start_line=3, end_line=3),
        ],
    )
    assert patched == "line 1\nline 2\nline 4"


def test_deletions_then_replacements_then_insertions():
    patched = apply_line_patch(
        "a\nb\nc\nd",
        insertions=[LineInsertion(line=0, content="top")],
        deletions=[LineDeletion(start_line=3, end_line=3)],
        replacements=[LineReplacement(start_line=1, end_line=1, content="B")],
    )
    assert patched == "top\na\nB\nc"


def test_empty_content_is_a_single_empty_line():
    patched = apply_line_patch("", insertions=[LineInsertion(line=0, content="first")])
    assert patched == "first\n"


def test_later_groups_address_the_already_patched_text():
    patched = apply_line_patch(
        "a\nb\nc\nd",
        deletions=[LineDeletion(start_line=0, end_line=0)],
        replacements=[LineReplacement(start_line=0, end_line=0, content="B")],
        insertions=[LineInsertion(line=1, content="new")],
    )
    # "b" is line 0 once "a" is gone; "c" is line 1 after the replacement
    assert patched == "B\nnew\nc\nd"

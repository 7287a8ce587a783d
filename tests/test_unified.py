"""Unit tests for core/diff/unified.py"""

import pytest

from spotdiff.core.diff.text_diff import TextDiffEngine, TextCompareOptions
from spotdiff.core.diff.unified import flatten, format_unified
from spotdiff.core.models import DiffLineType, UnifiedLine


def test_display_numbers_run_across_whole_output(engine):
    """Numbers count emitted lines, not positions in either file."""
    script = engine.diff("a\nb\nc", "a\nx\nc\nd")
    lines = flatten(script)
    assert [line.display_number for line in lines] == list(range(1, len(lines) + 1))
    assert [(line.kind, line.text) for line in lines] == [
        (DiffLineType.UNCHANGED, "a"),
        (DiffLineType.REMOVED, "b"),
        (DiffLineType.ADDED, "x"),
        (DiffLineType.UNCHANGED, "c"),
        (DiffLineType.ADDED, "d"),
    ]


@pytest.mark.parametrize("original,modified", [
    ("a\nb\nc\n", "c\nb\na\n"),
    ("one\n\ntwo\n\n", "\none\ntwo\nthree"),
    ("", "x\ny"),
    ("x\ny", ""),
])
def test_unified_lines_reconstruct_both_inputs(engine, original, modified):
    lines = flatten(engine.diff(original, modified))
    left = [l.text for l in lines if l.kind != DiffLineType.ADDED]
    right = [l.text for l in lines if l.kind != DiffLineType.REMOVED]
    assert left == list(engine.split(original))
    assert right == list(engine.split(modified))


def test_unchanged_lines_show_original_text_when_ignoring_whitespace():
    engine = TextDiffEngine(TextCompareOptions(ignore_whitespace=True))
    lines = flatten(engine.diff("foo bar", "foo  bar"))
    assert lines == [UnifiedLine(DiffLineType.UNCHANGED, "foo bar", 1)]


def test_empty_lines_are_emitted(engine):
    lines = flatten(engine.diff("a\n\nb", "a\n\nb"))
    assert [l.text for l in lines] == ["a", "", "b"]


def test_format_unified_markers_and_joining(engine):
    lines = flatten(engine.diff("keep\nold", "keep\nnew"))
    assert format_unified(lines) == "  keep\n- old\n+ new"


def test_format_unified_has_no_trailing_newline(engine):
    text = format_unified(flatten(engine.diff("a\n", "a\nb\n")))
    assert text == "  a\n+ b"
    assert not text.endswith("\n")


def test_format_unified_empty():
    assert format_unified([]) == ""

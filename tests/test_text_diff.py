"""Unit tests for core/diff/text_diff.py"""

import pytest

from spotdiff.core.diff.splitter import split_lines
from spotdiff.core.diff.text_diff import TextCompareOptions, TextDiffEngine, diff_lines
from spotdiff.core.models import (
    EditOp,
    EditOpType,
    InputTooLargeError,
    LineSequence,
    MissingInputError,
)


def _ops(original, modified, **options):
    script = diff_lines(
        LineSequence.from_lines(original),
        LineSequence.from_lines(modified),
        TextCompareOptions(**options)
    )
    return list(script.ops)


def _assert_covers(script):
    """Every line appears once, in order, on its own side."""
    left = [op.original_index for op in script.ops if op.op_type != EditOpType.ADDED]
    right = [op.modified_index for op in script.ops if op.op_type != EditOpType.REMOVED]
    assert left == list(range(len(script.original)))
    assert right == list(range(len(script.modified)))


CASES = [
    ([], []),
    (["a"], []),
    ([], ["a"]),
    (["a", "b", "c"], ["a", "b", "c"]),
    (["a", "b", "c"], ["x", "a", "b", "c"]),
    (["a", "b", "c", "d"], ["a", "c", "d", "e"]),
    (["a", "a", "b", "a"], ["b", "a", "a", "a", "c"]),
    (["x", "y", "z"], ["p", "q"]),
    (["", "a", "", "b"], ["a", "", "", "b", ""]),
]


@pytest.mark.parametrize("original,modified", CASES)
def test_script_covers_both_sequences(original, modified):
    script = diff_lines(LineSequence.from_lines(original), LineSequence.from_lines(modified))
    _assert_covers(script)


@pytest.mark.parametrize("original,modified", CASES)
def test_script_is_minimal(original, modified):
    """Unchanged count equals the LCS length, so edits are minimal."""
    ops = _ops(original, modified)
    kept = sum(1 for op in ops if op.op_type == EditOpType.UNCHANGED)

    # Reference LCS length
    n, m = len(original), len(modified)
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n):
        for j in range(m):
            if original[i] == modified[j]:
                table[i + 1][j + 1] = table[i][j] + 1
            else:
                table[i + 1][j + 1] = max(table[i][j + 1], table[i + 1][j])
    assert kept == table[n][m]


def test_identity_is_all_unchanged():
    lines = ["one", "two", "", "two", "three"]
    ops = _ops(lines, lines)
    assert ops == [EditOp.unchanged(i, i) for i in range(len(lines))]


def test_leading_insertion_is_anchored_before_matches():
    ops = _ops(["a", "b", "c"], ["x", "a", "b", "c"])
    assert ops == [
        EditOp.added(0),
        EditOp.unchanged(0, 1),
        EditOp.unchanged(1, 2),
        EditOp.unchanged(2, 3),
    ]


def test_earliest_lines_are_matched_first():
    """With repeated lines the first unmatched original pairs with the first modified."""
    ops = _ops(["x", "a"], ["a", "y", "a"])
    assert ops == [
        EditOp.removed(0),
        EditOp.unchanged(1, 0),
        EditOp.added(1),
        EditOp.added(2),
    ]


def test_duplicate_insertion_goes_after_existing_line():
    ops = _ops(["a"], ["a", "a"])
    assert ops == [EditOp.unchanged(0, 0), EditOp.added(1)]


def test_replacement_lists_removals_before_additions():
    ops = _ops(["a", "old1", "old2", "z"], ["a", "new1", "new2", "z"])
    assert [op.op_type for op in ops] == [
        EditOpType.UNCHANGED,
        EditOpType.REMOVED,
        EditOpType.REMOVED,
        EditOpType.ADDED,
        EditOpType.ADDED,
        EditOpType.UNCHANGED,
    ]


def test_whitespace_change_with_and_without_ignore():
    original = split_lines("foo bar")
    modified = split_lines("foo  bar")
    assert [op.op_type for op in diff_lines(original, modified)] == [
        EditOpType.REMOVED, EditOpType.ADDED
    ]

    original = split_lines("foo bar", normalize_whitespace=True)
    modified = split_lines("foo  bar", normalize_whitespace=True)
    assert [op.op_type for op in diff_lines(original, modified)] == [EditOpType.UNCHANGED]


def test_whitespace_only_lines_match_empty_lines_when_ignoring(ws_engine):
    script = ws_engine.diff("a\n   \nb", "a\n\nb")
    assert script.is_identity


def test_whitespace_only_lines_differ_from_empty_lines_by_default(engine):
    script = engine.diff("a\n   \nb", "a\n\nb")
    assert not script.is_identity


def test_ignore_case_option():
    engine = TextDiffEngine(TextCompareOptions(ignore_case=True))
    assert engine.diff("Hello\nWORLD", "hello\nworld").is_identity


def test_missing_input_is_reported_before_work(engine):
    with pytest.raises(MissingInputError) as exc:
        engine.compare(None, "text")
    assert exc.value.side == "original"

    with pytest.raises(MissingInputError) as exc:
        engine.compare("text", None)
    assert exc.value.side == "modified"

    with pytest.raises(MissingInputError):
        diff_lines(LineSequence(), None)


def test_input_too_large():
    engine = TextDiffEngine(TextCompareOptions(max_lines=3))
    with pytest.raises(InputTooLargeError) as exc:
        engine.compare("a\nb", "1\n2\n3\n4")
    assert exc.value.side == "modified"
    assert exc.value.line_count == 4
    assert exc.value.limit == 3


def test_limit_is_inclusive():
    engine = TextDiffEngine(TextCompareOptions(max_lines=3))
    result = engine.compare("a\nb\nc", "a\nb\nc")
    assert result.is_identical


def test_invalid_options_rejected():
    with pytest.raises(ValueError):
        TextCompareOptions(context_lines=-1)
    with pytest.raises(ValueError):
        TextCompareOptions(max_lines=0)


def test_context_lines_never_truncates_output():
    original = "\n".join(f"line {i}" for i in range(20))
    modified = original.replace("line 10", "changed")
    for context in (0, 3, 100):
        result = TextDiffEngine(TextCompareOptions(context_lines=context)).compare(original, modified)
        assert len(result.lines) == 21


def test_repeated_calls_are_identical(engine):
    original = "a\nb\na\nc\nb\na"
    modified = "b\na\nc\na\nb\nb"
    first = engine.compare(original, modified)
    second = engine.compare(original, modified)
    assert first == second
    assert first is not second


def test_compare_bundles_views_and_summary(engine):
    result = engine.compare("a\nb\nc\n", "a\nc\nd\n", "old.txt", "new.txt")
    assert result.left_label == "old.txt"
    assert result.right_label == "new.txt"
    assert len(result.lines) == len(result.rows) == len(result.script)
    assert result.summary.added == 1
    assert result.summary.removed == 1
    assert result.summary.unchanged == 2
    assert result.has_differences


def test_empty_against_empty(engine):
    result = engine.compare("", "")
    assert result.lines == ()
    assert result.rows == ()
    assert (result.summary.added, result.summary.removed, result.summary.unchanged) == (0, 0, 0)
    assert result.is_identical
    assert result.to_text() == ""


def test_pure_addition(engine):
    result = engine.compare("", "line1")
    assert len(result.lines) == 1
    line = result.lines[0]
    assert line.text == "line1"
    assert line.display_number == 1
    assert line.prefix == "+"

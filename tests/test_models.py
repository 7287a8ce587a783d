"""Unit tests for core/models.py"""

import dataclasses

import pytest

from spotdiff.core.models import (
    DiffError,
    DiffLineType,
    EditOp,
    EditOpType,
    InputTooLargeError,
    LineSequence,
    MissingInputError,
    UnifiedLine,
)


def test_line_sequence_requires_matching_keys():
    with pytest.raises(ValueError):
        LineSequence(texts=("a", "b"), keys=("a",))


def test_line_sequence_behaves_like_a_sequence():
    seq = LineSequence.from_lines(["a", "b"])
    assert len(seq) == 2
    assert seq[1] == "b"
    assert list(seq) == ["a", "b"]


def test_models_are_immutable():
    seq = LineSequence.from_lines(["a"])
    with pytest.raises(dataclasses.FrozenInstanceError):
        seq.texts = ("b",)
    with pytest.raises(dataclasses.FrozenInstanceError):
        EditOp.added(0).modified_index = 1


def test_edit_op_constructors():
    assert EditOp.unchanged(1, 2) == EditOp(EditOpType.UNCHANGED, 1, 2)
    assert EditOp.removed(3) == EditOp(EditOpType.REMOVED, 3, None)
    assert EditOp.added(4) == EditOp(EditOpType.ADDED, None, 4)
    assert EditOp.added(4).line_type == DiffLineType.ADDED


def test_unified_line_prefixes():
    assert UnifiedLine(DiffLineType.ADDED, "", 1).prefix == "+"
    assert UnifiedLine(DiffLineType.REMOVED, "", 1).prefix == "-"
    assert UnifiedLine(DiffLineType.UNCHANGED, "", 1).prefix == " "


def test_errors_share_a_base_class():
    assert issubclass(MissingInputError, DiffError)
    assert issubclass(InputTooLargeError, DiffError)
    assert "limit is 10" in str(InputTooLargeError("original", 11, 10))

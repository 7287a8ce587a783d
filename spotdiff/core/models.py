"""
Core data models for the line diff engine.

This module defines all data structures produced by a diff:
- Line sequences (display text plus comparison keys)
- Edit operations and edit scripts
- Unified and side-by-side view records
- Summary statistics
- Errors raised by the engine

All models are designed to be:
- UI-agnostic (renderers only read them)
- Immutable (every diff call builds a fresh set)
- Type-hinted for IDE support
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional, Sequence


# =============================================================================
# Enumerations
# =============================================================================

class EditOpType(Enum):
    """Kind of step in an edit script."""
    UNCHANGED = auto()  # Line kept, present in both sequences
    REMOVED = auto()    # Line only in the original sequence
    ADDED = auto()      # Line only in the modified sequence


class DiffLineType(Enum):
    """Classification of a line in the unified view."""
    ADDED = auto()
    REMOVED = auto()
    UNCHANGED = auto()


_OP_TO_LINE_TYPE = {
    EditOpType.UNCHANGED: DiffLineType.UNCHANGED,
    EditOpType.REMOVED: DiffLineType.REMOVED,
    EditOpType.ADDED: DiffLineType.ADDED,
}

_PREFIXES = {
    DiffLineType.ADDED: '+',
    DiffLineType.REMOVED: '-',
    DiffLineType.UNCHANGED: ' ',
}


# =============================================================================
# Errors
# =============================================================================

class DiffError(Exception):
    """Base class for failures reported by the diff engine."""


class MissingInputError(DiffError):
    """Raised when one of the two inputs is absent."""

    def __init__(self, side: str):
        super().__init__(f"Missing {side} input")
        self.side = side


class InputTooLargeError(DiffError):
    """Raised when an input exceeds the configured line ceiling."""

    def __init__(self, side: str, line_count: int, limit: int):
        super().__init__(
            f"The {side} input has {line_count} lines; the limit is {limit}"
        )
        self.side = side
        self.line_count = line_count
        self.limit = limit


# =============================================================================
# Line Sequences
# =============================================================================

@dataclass(frozen=True)
class LineSequence:
    """
    Ordered, 0-indexed lines of one input.

    `texts` holds the lines exactly as they appeared (without terminators)
    and is what renderers display. `keys` holds the value used for
    equality by the diff engine; it equals `texts` unless the splitter
    normalized whitespace or case.
    """
    texts: tuple[str, ...] = ()
    keys: tuple[str, ...] = ()

    def __post_init__(self):
        if len(self.texts) != len(self.keys):
            raise ValueError("texts and keys must have the same length")

    def __len__(self) -> int:
        return len(self.texts)

    def __getitem__(self, index: int) -> str:
        return self.texts[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.texts)

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> LineSequence:
        """Build a sequence compared verbatim."""
        texts = tuple(lines)
        return cls(texts=texts, keys=texts)


# =============================================================================
# Edit Script
# =============================================================================

@dataclass(frozen=True)
class EditOp:
    """
    One step of an edit script.

    Indices reference positions in the original and modified
    `LineSequence`; the index of the side a step does not touch is None.
    """
    op_type: EditOpType
    original_index: Optional[int] = None
    modified_index: Optional[int] = None

    @classmethod
    def unchanged(cls, original_index: int, modified_index: int) -> EditOp:
        return cls(EditOpType.UNCHANGED, original_index, modified_index)

    @classmethod
    def removed(cls, original_index: int) -> EditOp:
        return cls(EditOpType.REMOVED, original_index, None)

    @classmethod
    def added(cls, modified_index: int) -> EditOp:
        return cls(EditOpType.ADDED, None, modified_index)

    @property
    def line_type(self) -> DiffLineType:
        return _OP_TO_LINE_TYPE[self.op_type]


@dataclass(frozen=True)
class EditScript:
    """
    Ordered edit operations turning `original` into `modified`.

    Every original line is covered exactly once by a REMOVED or UNCHANGED
    op, and every modified line exactly once by an ADDED or UNCHANGED op,
    in ascending index order on both sides.
    """
    original: LineSequence
    modified: LineSequence
    ops: tuple[EditOp, ...] = ()

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self) -> Iterator[EditOp]:
        return iter(self.ops)

    @property
    def is_identity(self) -> bool:
        """True when every op keeps its line."""
        return all(op.op_type == EditOpType.UNCHANGED for op in self.ops)


# =============================================================================
# View Records
# =============================================================================

@dataclass(frozen=True)
class UnifiedLine:
    """
    A line of the unified view.

    `display_number` is a running counter over the whole unified
    sequence, starting at 1. It is not a line number of either file.
    """
    kind: DiffLineType
    text: str
    display_number: int

    @property
    def prefix(self) -> str:
        """Marker used by the plain-text export."""
        return _PREFIXES[self.kind]


@dataclass(frozen=True)
class AlignedRow:
    """
    A row of the side-by-side view.

    `left` or `right` is None when that side has no counterpart.
    """
    row_index: int
    left: Optional[str]
    right: Optional[str]
    changed: bool


@dataclass(frozen=True)
class DiffSummary:
    """Counts of each line kind in a unified view."""
    added: int = 0
    removed: int = 0
    unchanged: int = 0

    @property
    def total_changes(self) -> int:
        """Total number of changed lines."""
        return self.added + self.removed

    @property
    def similarity_ratio(self) -> float:
        """
        Calculate similarity ratio (0.0 to 1.0).

        1.0 means identical, 0.0 means nothing in common.
        """
        total = max(self.unchanged + self.removed, self.unchanged + self.added)
        if total == 0:
            return 1.0
        return self.unchanged / total

    def __str__(self) -> str:
        return f"+{self.added} -{self.removed} ={self.unchanged}"


@dataclass(frozen=True)
class DiffResult:
    """
    Complete result of comparing two texts.

    Both views are derived from the same `script`.
    """
    left_label: str
    right_label: str
    script: EditScript
    lines: tuple[UnifiedLine, ...] = ()
    rows: tuple[AlignedRow, ...] = ()
    summary: DiffSummary = field(default_factory=DiffSummary)

    @property
    def is_identical(self) -> bool:
        return self.summary.total_changes == 0

    @property
    def has_differences(self) -> bool:
        """Check if there are any differences."""
        return not self.is_identical

    def to_text(self) -> str:
        """Plain-text serialization of the unified view."""
        from spotdiff.core.diff.unified import format_unified

        return format_unified(self.lines)

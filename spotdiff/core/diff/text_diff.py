"""
Text diff engine.

Provides line-by-line comparison with support for:
- Longest-common-subsequence edit scripts
- Whitespace-insensitive comparison
- Case-insensitive comparison
- Unified and side-by-side views derived from one edit script
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from spotdiff.core.diff.side_by_side import align
from spotdiff.core.diff.splitter import split_lines
from spotdiff.core.diff.summary import summarize
from spotdiff.core.diff.unified import flatten
from spotdiff.core.models import (
    DiffResult,
    EditOp,
    EditScript,
    InputTooLargeError,
    LineSequence,
    MissingInputError,
)


logger = logging.getLogger(__name__)

# Per-side line ceiling; the LCS table grows with the product of both sides
MAX_LINES = 5000


@dataclass(frozen=True)
class TextCompareOptions:
    """Options for text comparison."""
    ignore_whitespace: bool = False
    ignore_case: bool = False
    context_lines: int = 3  # Accepted for callers; output is never truncated
    max_lines: int = MAX_LINES

    def __post_init__(self):
        if self.context_lines < 0:
            raise ValueError("context_lines must be non-negative")
        if self.max_lines < 1:
            raise ValueError("max_lines must be positive")


def diff_lines(
    original: LineSequence,
    modified: LineSequence,
    options: Optional[TextCompareOptions] = None
) -> EditScript:
    """
    Compute the minimal line edit script between two sequences.

    Lines match when their comparison keys are equal. Where several
    minimal scripts exist, the earliest unmatched original line is matched
    with the earliest unmatched modified line, and inside a changed block
    removals come before additions.

    Args:
        original: Lines of the original input
        modified: Lines of the modified input
        options: Comparison options (only `max_lines` is read here; the
            keys already reflect whitespace and case handling)

    Returns:
        EditScript covering both sequences

    Raises:
        MissingInputError: If either sequence is None
        InputTooLargeError: If either sequence exceeds `options.max_lines`
    """
    options = options or TextCompareOptions()

    if original is None:
        raise MissingInputError("original")
    if modified is None:
        raise MissingInputError("modified")
    _check_size("original", len(original), options.max_lines)
    _check_size("modified", len(modified), options.max_lines)

    left = original.keys
    right = modified.keys
    n, m = len(left), len(right)

    # A shared prefix is matched diagonally by the table walk anyway
    prefix = 0
    while prefix < n and prefix < m and left[prefix] == right[prefix]:
        prefix += 1

    ops = [EditOp.unchanged(i, i) for i in range(prefix)]
    ops.extend(_lcs_ops(left, right, prefix, n, prefix, m))

    logger.debug(
        "Diffed %d against %d lines (%d ops, %d shared leading lines)",
        n, m, len(ops), prefix
    )
    return EditScript(original=original, modified=modified, ops=tuple(ops))


def _check_size(side: str, line_count: int, limit: int) -> None:
    if line_count > limit:
        raise InputTooLargeError(side, line_count, limit)


def _lcs_ops(
    left: tuple[str, ...],
    right: tuple[str, ...],
    lo_left: int,
    hi_left: int,
    lo_right: int,
    hi_right: int
) -> list[EditOp]:
    """Edit ops for left[lo_left:hi_left] against right[lo_right:hi_right]."""
    rows = hi_left - lo_left
    cols = hi_right - lo_right

    if rows == 0:
        return [EditOp.added(j) for j in range(lo_right, hi_right)]
    if cols == 0:
        return [EditOp.removed(i) for i in range(lo_left, hi_left)]

    # Intern keys so the inner loop compares ints
    ids: dict[str, int] = {}
    a = [ids.setdefault(left[lo_left + i], len(ids)) for i in range(rows)]
    b = [ids.setdefault(right[lo_right + j], len(ids)) for j in range(cols)]

    # table[i][j] = LCS length of a[i:] and b[j:]
    table = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(rows - 1, -1, -1):
        row = table[i]
        below = table[i + 1]
        ai = a[i]
        for j in range(cols - 1, -1, -1):
            if ai == b[j]:
                row[j] = below[j + 1] + 1
            else:
                down = below[j]
                across = row[j + 1]
                row[j] = down if down >= across else across

    ops: list[EditOp] = []
    i = j = 0
    while i < rows and j < cols:
        if a[i] == b[j]:
            ops.append(EditOp.unchanged(lo_left + i, lo_right + j))
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            ops.append(EditOp.removed(lo_left + i))
            i += 1
        else:
            ops.append(EditOp.added(lo_right + j))
            j += 1

    ops.extend(EditOp.removed(lo_left + k) for k in range(i, rows))
    ops.extend(EditOp.added(lo_right + k) for k in range(j, cols))
    return ops


class TextDiffEngine:
    """
    Engine for comparing two texts.

    Each call is independent: options are fixed per engine and every
    result is built from scratch, so one engine may be shared across
    threads.
    """

    def __init__(self, options: Optional[TextCompareOptions] = None):
        self.options = options or TextCompareOptions()

    def split(self, text: str) -> LineSequence:
        """Split one input according to the engine options."""
        return split_lines(
            text,
            normalize_whitespace=self.options.ignore_whitespace,
            ignore_case=self.options.ignore_case
        )

    def diff(self, original_text: str, modified_text: str) -> EditScript:
        """Compute the edit script between two texts."""
        if original_text is None:
            raise MissingInputError("original")
        if modified_text is None:
            raise MissingInputError("modified")

        return diff_lines(
            self.split(original_text),
            self.split(modified_text),
            self.options
        )

    def compare(
        self,
        original_text: str,
        modified_text: str,
        left_label: str = "original",
        right_label: str = "modified"
    ) -> DiffResult:
        """
        Compare two texts.

        Args:
            original_text: Decoded original content
            modified_text: Decoded modified content
            left_label: Label for the original side
            right_label: Label for the modified side

        Returns:
            DiffResult with the edit script, both views and the summary
        """
        script = self.diff(original_text, modified_text)
        lines = flatten(script)

        return DiffResult(
            left_label=left_label,
            right_label=right_label,
            script=script,
            lines=tuple(lines),
            rows=tuple(align(script)),
            summary=summarize(lines)
        )

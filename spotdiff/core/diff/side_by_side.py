"""
Side-by-side view of an edit script.

Rows are paired from the edit script itself, never by zipping the two
inputs by position, so an insertion or deletion does not shift the rows
that follow it.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from spotdiff.core.models import AlignedRow, EditOpType, EditScript


def align(script: EditScript) -> list[AlignedRow]:
    """
    Expand an edit script into paired rows, one row per op.

    Unchanged ops pair both texts; removed ops leave the right cell empty
    and added ops leave the left cell empty.
    """
    rows: list[AlignedRow] = []

    for index, op in enumerate(script.ops):
        if op.op_type == EditOpType.UNCHANGED:
            row = AlignedRow(
                row_index=index,
                left=script.original[op.original_index],
                right=script.modified[op.modified_index],
                changed=False
            )
        elif op.op_type == EditOpType.REMOVED:
            row = AlignedRow(
                row_index=index,
                left=script.original[op.original_index],
                right=None,
                changed=True
            )
        else:
            row = AlignedRow(
                row_index=index,
                left=None,
                right=script.modified[op.modified_index],
                changed=True
            )
        rows.append(row)

    return rows


class SideBySideFormatter:
    """Format aligned rows as plain two-column text."""

    def __init__(self, width: int = 80, tab_size: int = 4):
        self.width = width
        self.tab_size = tab_size

    @property
    def column_width(self) -> int:
        """Width of each column; the separator takes three characters."""
        return max((self.width - 3) // 2, 8)

    def format(self, rows: Iterable[AlignedRow]) -> Iterator[tuple[str, str, str]]:
        """
        Format rows for side-by-side display.

        Yields tuples of (left_cell, separator, right_cell). Cells carry
        the line number within their own file; an empty side yields "".
        """
        column = self.column_width
        left_num = right_num = 0

        for row in rows:
            left = right = ""
            if row.left is not None:
                left_num += 1
                left = self._format_cell(row.left, left_num, column)
            if row.right is not None:
                right_num += 1
                right = self._format_cell(row.right, right_num, column)

            yield (left, self._separator(row), right)

    def render(self, rows: Iterable[AlignedRow]) -> str:
        """Render rows as a single string, one line per row."""
        column = self.column_width
        return "\n".join(
            f"{left:<{column}}{sep}{right}".rstrip()
            for left, sep, right in self.format(rows)
        )

    @staticmethod
    def _separator(row: AlignedRow) -> str:
        if not row.changed:
            return "   "
        if row.left is None:
            return " > "
        return " < "

    def _format_cell(self, text: str, line_num: int, column: int) -> str:
        """Format a single cell with its line number."""
        content = text.replace('\t', ' ' * self.tab_size)
        prefix = f"{line_num:4d}: "

        max_content = column - len(prefix)
        if len(content) > max_content:
            content = content[:max(max_content - 3, 0)] + "..."

        return prefix + content

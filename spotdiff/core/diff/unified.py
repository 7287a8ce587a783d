"""
Unified view of an edit script.

The unified view is a single sequence of classified lines. Its export
form is one `"<marker> <text>"` line per entry.
"""

from __future__ import annotations

from typing import Iterable

from spotdiff.core.models import EditOpType, EditScript, UnifiedLine


def flatten(script: EditScript) -> list[UnifiedLine]:
    """
    Expand an edit script into unified lines.

    Removed and unchanged lines take their text from the original
    sequence, added lines from the modified one. Display numbers run from
    1 across the whole output.
    """
    lines: list[UnifiedLine] = []

    for number, op in enumerate(script.ops, start=1):
        if op.op_type == EditOpType.ADDED:
            text = script.modified[op.modified_index]
        else:
            text = script.original[op.original_index]

        lines.append(UnifiedLine(
            kind=op.line_type,
            text=text,
            display_number=number
        ))

    return lines


def format_unified(lines: Iterable[UnifiedLine]) -> str:
    """
    Serialize unified lines for copy/export.

    Markers are '+' for added, '-' for removed and a space for unchanged
    lines. Lines are joined with '\\n' and no trailing newline is added.
    """
    return "\n".join(f"{line.prefix} {line.text}" for line in lines)

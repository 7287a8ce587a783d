"""Line counts for a unified view."""

from __future__ import annotations

from typing import Iterable

from spotdiff.core.models import DiffLineType, DiffSummary, UnifiedLine


def summarize(lines: Iterable[UnifiedLine]) -> DiffSummary:
    """Count added, removed and unchanged lines."""
    added = removed = unchanged = 0

    for line in lines:
        if line.kind == DiffLineType.ADDED:
            added += 1
        elif line.kind == DiffLineType.REMOVED:
            removed += 1
        else:
            unchanged += 1

    return DiffSummary(added=added, removed=removed, unchanged=unchanged)

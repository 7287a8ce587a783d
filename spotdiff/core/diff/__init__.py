"""
Diff module for line-oriented text comparison.

Provides:
- Line splitting with optional whitespace/case-insensitive keys
- An LCS diff engine producing edit scripts
- Unified and side-by-side views of an edit script
- Summary counts
"""

from spotdiff.core.diff.text_diff import (
    TextDiffEngine,
    TextCompareOptions,
    diff_lines,
)
from spotdiff.core.diff.splitter import split_lines
from spotdiff.core.diff.unified import flatten, format_unified
from spotdiff.core.diff.side_by_side import align, SideBySideFormatter
from spotdiff.core.diff.summary import summarize

__all__ = [
    # Engine
    'TextDiffEngine',
    'TextCompareOptions',
    'diff_lines',
    'split_lines',
    # Views
    'flatten',
    'format_unified',
    'align',
    'SideBySideFormatter',
    'summarize',
]

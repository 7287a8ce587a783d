"""
Line splitting for the diff engine.

Turns a decoded text blob into a `LineSequence`, keeping the verbatim
line texts for display and a separate comparison key per line.
"""

from __future__ import annotations

import re

from spotdiff.core.models import LineSequence


# CRLF first so it is consumed as a single terminator
LINE_TERMINATOR = re.compile(r'\r\n|\r|\n')


def collapse_whitespace(line: str) -> str:
    """Collapse runs of whitespace to one space and trim both ends."""
    return ' '.join(line.split())


def comparison_key(
    line: str,
    ignore_whitespace: bool = False,
    ignore_case: bool = False
) -> str:
    """Key used for line equality under the given options."""
    result = line
    if ignore_whitespace:
        result = collapse_whitespace(result)
    if ignore_case:
        result = result.lower()
    return result


def split_lines(
    text: str,
    normalize_whitespace: bool = False,
    ignore_case: bool = False
) -> LineSequence:
    """
    Split text into a line sequence.

    A final terminator does not produce a trailing empty line, and the
    empty string yields an empty sequence.

    Args:
        text: Decoded text of one input
        normalize_whitespace: Compare lines with whitespace runs collapsed
            and leading/trailing whitespace removed
        ignore_case: Compare lines case-insensitively

    Returns:
        LineSequence with verbatim texts and comparison keys
    """
    if not text:
        return LineSequence()

    texts = LINE_TERMINATOR.split(text)
    if texts[-1] == '':
        texts.pop()

    if not normalize_whitespace and not ignore_case:
        return LineSequence.from_lines(texts)

    keys = [comparison_key(t, normalize_whitespace, ignore_case) for t in texts]
    return LineSequence(texts=tuple(texts), keys=tuple(keys))

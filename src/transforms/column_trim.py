"""Column trimming transform.

Offsets are zero-based code point positions on decoded text, so a
multi-byte character counts as a single column.
"""

from __future__ import annotations

from core.errors import PipeConfigError
from transforms.composition import LineTransform


def column_trim(start: int, end: int) -> LineTransform:
    """Build a transform keeping columns ``[start, end)`` of every line.

    An ``end`` past the line length keeps everything from ``start``.
    An ``end`` at or before ``start`` yields an empty line.

    Args:
        start: First column to keep.
        end: Column after the last one to keep.

    Returns:
        Line transform applying the trim.

    Raises:
        PipeConfigError: If either offset is negative.
    """
    if start < 0 or end < 0:
        raise PipeConfigError(
            f"Invalid column range [{start}, {end}): offsets must be zero or greater."
        )

    def trim(line_number: int, text: str) -> str:
        if end <= start:
            return ""
        return text[start:end]

    trim.__name__ = f"column_trim({start}, {end})"
    return trim

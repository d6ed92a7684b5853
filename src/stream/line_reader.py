"""Chunked text source to line splitting.

This module turns ``read(size)`` chunks into terminator-stripped lines.
It accepts ``\\n``, ``\\r\\n``, and ``\\r`` terminators, including a
``\\r\\n`` pair split across two chunks.
"""

from __future__ import annotations

import re

from core.errors import SourceReadError
from core.types import TextSource

_TERMINATOR_PATTERN = re.compile(r"\r\n|\r|\n")


class LineReader:
    """Pull lines from a text source one at a time.

    Unterminated text is kept as a list of chunk pieces and joined once a
    terminator arrives, so every character is scanned a bounded number of
    times however long the line is.
    """

    def __init__(self, source: TextSource, chunk_size: int) -> None:
        self._source = source
        self._chunk_size = chunk_size
        self._pieces: list[str] = []
        self._buffer = ""
        self._position = 0
        self._exhausted = False

    def read_line(self) -> str | None:
        """Return the next line without its terminator.

        Returns:
            Line text, or None once the source is exhausted. A trailing
            unterminated line is returned when it is non-empty.

        Raises:
            SourceReadError: If the source fails or returns non-text data.
        """
        while True:
            match = _TERMINATOR_PATTERN.search(self._buffer, self._position)
            if match is not None and not self._needs_lookahead(match):
                return self._take_line(match.start(), match.end())
            if self._exhausted:
                return self._drain_remainder()
            self._fill_buffer()

    def _needs_lookahead(self, match: re.Match[str]) -> bool:
        # A lone CR at the buffer end may be the first half of CRLF.
        return (
            match.group() == "\r"
            and match.end() == len(self._buffer)
            and not self._exhausted
        )

    def _take_line(self, line_end: int, next_start: int) -> str:
        tail = self._buffer[self._position : line_end]
        if self._pieces:
            self._pieces.append(tail)
            tail = "".join(self._pieces)
            self._pieces = []
        self._position = next_start
        return tail

    def _drain_remainder(self) -> str | None:
        line = self._take_line(len(self._buffer), len(self._buffer))
        return line or None

    def _fill_buffer(self) -> None:
        chunk = _read_chunk(self._source, self._chunk_size)
        if not chunk:
            self._exhausted = True
            return
        # A held-back CR stays in the buffer so a leading LF in the chunk pairs with it.
        remainder = self._buffer[self._position :]
        if remainder.endswith("\r"):
            self._pieces.append(remainder[:-1])
            self._buffer = "\r" + chunk
        else:
            self._pieces.append(remainder)
            self._buffer = chunk
        self._position = 0


def _read_chunk(source: TextSource, chunk_size: int) -> str:
    """Read one chunk and wrap source failures.

    Args:
        source: Text source to read from.
        chunk_size: Maximum characters requested.

    Returns:
        Decoded text chunk, empty at end of input.

    Raises:
        SourceReadError: If the read fails or yields non-text data.
    """
    try:
        chunk = source.read(chunk_size)
    except Exception as error:
        raise SourceReadError(
            f"Failed to read from source {type(source).__name__}: {error}"
        ) from error
    if not isinstance(chunk, str):
        raise SourceReadError(
            f"Source {type(source).__name__} returned {type(chunk).__name__}, "
            "expected decoded text. Open the source in text mode."
        )
    return chunk

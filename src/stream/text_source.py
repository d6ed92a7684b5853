"""File-backed text sources.

This module opens local files as decoded text sources for pipes.
Newline translation is disabled so the line reader sees raw terminators.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from core.errors import SourceReadError


def open_text_source(path: str | Path, encoding: str) -> TextIO:
    """Open a local file for chunked text reads.

    Args:
        path: File path to read.
        encoding: Text encoding of the file.

    Returns:
        Open text stream; the caller or the owning pipe closes it.

    Raises:
        SourceReadError: If the file is missing or cannot be opened.
    """
    source_path = Path(path).expanduser()
    if not source_path.is_file():
        raise SourceReadError(
            f"Failed to open source at {source_path}: file does not exist. "
            "Provide an existing text file."
        )
    try:
        return source_path.open("r", encoding=encoding, newline="")
    except OSError as error:
        raise SourceReadError(f"Failed to open source at {source_path}: {error}") from error

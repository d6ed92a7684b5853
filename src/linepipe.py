"""Public SDK surface for linepipe.

This module provides a stable import path for pipe users.
It re-exports the pipe, the reference transforms, and typed models.
"""

from __future__ import annotations

from pathlib import Path

from core.config import PipeConfig
from core.errors import (
    LinePipeError,
    PipeConfigError,
    ReadTimeoutError,
    SourceReadError,
    TransformError,
)
from core.types import Line, PipeState
from stream.streaming_pipe import StreamingPipe
from stream.text_source import open_text_source
from transforms.column_trim import column_trim
from transforms.composition import LineTransform, compose, compose_all, identity
from transforms.dump_tap import LoggerSink, StreamSink, dump_tap
from transforms.escaping import escape_line, escape_text, unescape_line, unescape_text

__all__ = [
    "Line",
    "LinePipeError",
    "LineTransform",
    "LoggerSink",
    "PipeConfig",
    "PipeConfigError",
    "PipeState",
    "ReadTimeoutError",
    "SourceReadError",
    "StreamSink",
    "StreamingPipe",
    "TransformError",
    "column_trim",
    "compose",
    "compose_all",
    "dump_tap",
    "escape_line",
    "escape_text",
    "identity",
    "open_pipe",
    "unescape_line",
    "unescape_text",
]


def open_pipe(
    path: str | Path,
    *transforms: LineTransform,
    config: PipeConfig | None = None,
) -> StreamingPipe:
    """Open a file and stream its lines through ``transforms``.

    Args:
        path: Text file to read.
        *transforms: Line transforms in application order.
        config: Optional runtime config, read from the environment if omitted.

    Returns:
        Running pipe that owns the opened file.

    Raises:
        SourceReadError: If the file cannot be opened.
    """
    resolved_config = config if config is not None else PipeConfig.from_env()
    source = open_text_source(path, resolved_config.encoding)
    return StreamingPipe(source, transforms, config=resolved_config, name=Path(path).name)

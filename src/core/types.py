"""Shared typed models.

This module defines the line record, the channel message union, the
pipe lifecycle states, and the source and sink protocols that keep the
interfaces between producer, consumer, and transforms explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Union

from core.errors import LinePipeError


@dataclass(frozen=True)
class Line:
    """One numbered line flowing through a pipe.

    Attributes:
        number: One-based sequence number assigned by the producer.
        text: Line content without its terminator.
    """

    number: int
    text: str


@dataclass(frozen=True)
class EndOfStream:
    """Marker published after the last line of a source.

    Attributes:
        line_count: Number of lines the producer published.
    """

    line_count: int


@dataclass(frozen=True)
class Failure:
    """Marker published when production stops on an error.

    Attributes:
        error: Domain error to surface to the consumer.
    """

    error: LinePipeError


ChannelMessage = Union[Line, EndOfStream, Failure]


class PipeState(Enum):
    """Lifecycle states of a streaming pipe."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CLOSED = "closed"
    FAILED = "failed"


class TextSource(Protocol):
    """Chunked text input consumed by a pipe."""

    def read(self, size: int) -> str: ...

    def close(self) -> None: ...


class DiagnosticSink(Protocol):
    """Receiver for lines observed by a dump tap."""

    def emit(self, label: str, text: str) -> None: ...

"""Diagnostic dump tap transform.

The tap passes every line through untouched and forwards a labelled
copy to a diagnostic sink. Sink failures are logged and never reach
the data path.
"""

from __future__ import annotations

import sys
from typing import TextIO

from core.constants import DEFAULT_DUMP_LABEL
from core.logging_config import get_logger
from core.types import DiagnosticSink
from transforms.composition import LineTransform

_LOGGER = get_logger(__name__)


class StreamSink:
    """Diagnostic sink writing ``label + text`` lines to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, label: str, text: str) -> None:
        """Write one labelled line, defaulting to the current stdout."""
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"{label}{text}\n")


class LoggerSink:
    """Diagnostic sink emitting one structured event per line."""

    def emit(self, label: str, text: str) -> None:
        """Log a ``line_dumped`` event."""
        _LOGGER.info("line_dumped", label=label, text=text)


def dump_tap(sink: DiagnosticSink | None = None, label: str = DEFAULT_DUMP_LABEL) -> LineTransform:
    """Build a transform that reports each line to a diagnostic sink.

    Args:
        sink: Receiver for labelled lines, stdout when omitted.
        label: Fixed label passed with every line.

    Returns:
        Line transform returning its input unchanged.
    """
    target = sink if sink is not None else StreamSink()

    def tap(line_number: int, text: str) -> str:
        try:
            target.emit(label, text)
        except Exception as error:
            _LOGGER.warning(
                "dump_tap_failed",
                label=label,
                line_number=line_number,
                error=str(error),
            )
        return text

    tap.__name__ = f"dump_tap({label})"
    return tap

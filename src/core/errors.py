"""linepipe exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipe stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class LinePipeError(Exception):
    """Base exception for all linepipe failures."""


class PipeConfigError(LinePipeError):
    """Raised for invalid runtime configuration or transform parameters."""


class SourceReadError(LinePipeError):
    """Raised when the upstream text source cannot supply the next chunk."""


class TransformError(LinePipeError):
    """Raised when a caller-supplied line transform fails."""


class ReadTimeoutError(LinePipeError):
    """Raised when a bounded read waits longer than allowed."""


class ChannelClosedError(LinePipeError):
    """Raised when reading from a channel that has been closed."""

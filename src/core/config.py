"""Runtime configuration model for linepipe.

This module owns all environment variable parsing and validation.
Pipes consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_CHANNEL_CAPACITY,
    DEFAULT_CLOSE_TIMEOUT_SECONDS,
    DEFAULT_ENCODING,
    DEFAULT_READ_CHUNK_SIZE,
    ENV_CHANNEL_CAPACITY,
    ENV_CLOSE_TIMEOUT,
    ENV_ENCODING,
    ENV_READ_CHUNK_SIZE,
    ENV_READ_TIMEOUT,
)
from core.errors import PipeConfigError


@dataclass(frozen=True)
class PipeConfig:
    """Validated runtime configuration.

    Attributes:
        channel_capacity: Transformed lines the producer may hold ahead of the consumer.
        read_chunk_size: Characters requested from the source per read.
        read_timeout: Default bound in seconds for consumer reads, None waits forever.
        close_timeout: Seconds ``close()`` waits for the producer before forcing release.
        encoding: Text encoding used for file-backed sources.
    """

    channel_capacity: int = DEFAULT_CHANNEL_CAPACITY
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE
    read_timeout: float | None = None
    close_timeout: float = DEFAULT_CLOSE_TIMEOUT_SECONDS
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self) -> None:
        if self.channel_capacity < 1:
            raise PipeConfigError(
                f"Invalid channel capacity {self.channel_capacity}: expected at least 1."
            )
        if self.read_chunk_size < 1:
            raise PipeConfigError(
                f"Invalid read chunk size {self.read_chunk_size}: expected at least 1."
            )
        if self.read_timeout is not None and self.read_timeout <= 0:
            raise PipeConfigError(
                f"Invalid read timeout {self.read_timeout}: expected a positive number."
            )
        if self.close_timeout < 0:
            raise PipeConfigError(
                f"Invalid close timeout {self.close_timeout}: expected zero or more seconds."
            )

    @classmethod
    def from_env(cls) -> "PipeConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PipeConfigError: If environment values are invalid.
        """
        return cls(
            channel_capacity=_parse_int(ENV_CHANNEL_CAPACITY, DEFAULT_CHANNEL_CAPACITY),
            read_chunk_size=_parse_int(ENV_READ_CHUNK_SIZE, DEFAULT_READ_CHUNK_SIZE),
            read_timeout=_parse_optional_float(ENV_READ_TIMEOUT),
            close_timeout=_parse_float(ENV_CLOSE_TIMEOUT, DEFAULT_CLOSE_TIMEOUT_SECONDS),
            encoding=_parse_encoding(os.getenv(ENV_ENCODING, DEFAULT_ENCODING)),
        )


def _parse_int(variable: str, default: int) -> int:
    """Parse an integer environment value.

    Args:
        variable: Environment variable name.
        default: Value used when the variable is unset.

    Returns:
        Parsed integer.

    Raises:
        PipeConfigError: If value cannot be parsed into int.
    """
    raw_value = os.getenv(variable)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError as error:
        raise PipeConfigError(
            f"Invalid {variable} value: expected integer, got '{raw_value}'. "
            f"Set {variable} to a numeric value."
        ) from error


def _parse_float(variable: str, default: float) -> float:
    """Parse a float environment value, falling back to a default."""
    parsed = _parse_optional_float(variable)
    return default if parsed is None else parsed


def _parse_optional_float(variable: str) -> float | None:
    """Parse an optional float environment value.

    Args:
        variable: Environment variable name.

    Returns:
        Parsed float, or None when the variable is unset or empty.

    Raises:
        PipeConfigError: If value cannot be parsed into float.
    """
    raw_value = os.getenv(variable)
    if raw_value is None or not raw_value.strip():
        return None
    try:
        return float(raw_value)
    except ValueError as error:
        raise PipeConfigError(
            f"Invalid {variable} value: expected a number of seconds, got '{raw_value}'."
        ) from error


def _parse_encoding(raw_value: str) -> str:
    """Validate a text encoding name against the codec registry."""
    try:
        return codecs.lookup(raw_value).name
    except LookupError as error:
        raise PipeConfigError(
            f"Invalid {ENV_ENCODING} value: unknown encoding '{raw_value}'."
        ) from error

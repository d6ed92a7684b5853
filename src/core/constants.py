"""Core constants used across linepipe modules.

This module centralizes defaults and environment variable names.
Keeping values here avoids magic literals in pipe and transform logic.
"""

from __future__ import annotations

DEFAULT_CHANNEL_CAPACITY = 1
DEFAULT_READ_CHUNK_SIZE = 8192
DEFAULT_CLOSE_TIMEOUT_SECONDS = 5.0
DEFAULT_ENCODING = "utf-8"
DEFAULT_DUMP_LABEL = "[DUMP]"
PIPE_NAME_PREFIX = "linepipe"
ENV_CHANNEL_CAPACITY = "LINEPIPE_CHANNEL_CAPACITY"
ENV_READ_CHUNK_SIZE = "LINEPIPE_READ_CHUNK_SIZE"
ENV_READ_TIMEOUT = "LINEPIPE_READ_TIMEOUT"
ENV_CLOSE_TIMEOUT = "LINEPIPE_CLOSE_TIMEOUT"
ENV_ENCODING = "LINEPIPE_ENCODING"

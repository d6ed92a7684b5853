"""Streaming line transformation pipe.

This module wires a text source, a composed line transform, and a
bounded channel into a readable stream. A daemon producer thread reads
and transforms lines; the consumer pulls them one at a time. Either a
clean end, a failure, or an explicit close ends the pipe, and the
source is released exactly once on every path.
"""

from __future__ import annotations

from enum import Enum
from itertools import count
import threading
import time
from typing import Iterable, Iterator, NoReturn

from core.config import PipeConfig
from core.constants import PIPE_NAME_PREFIX
from core.errors import ChannelClosedError, LinePipeError, TransformError
from core.logging_config import get_logger
from core.types import EndOfStream, Failure, Line, PipeState, TextSource
from stream.channel import BoundedChannel
from stream.line_reader import LineReader
from transforms.composition import LineTransform, compose_all, describe_transform

_LOGGER = get_logger(__name__)
_PIPE_IDS = count(1)
_JOIN_POLL_SECONDS = 0.05


class _TimeoutDefault(Enum):
    CONFIGURED = "configured"


_CONFIGURED_TIMEOUT = _TimeoutDefault.CONFIGURED


class _TrackedSource:
    """Source wrapper recording whether a read is in progress."""

    def __init__(self, source: TextSource) -> None:
        self._source = source
        self._lock = threading.Lock()
        self._reading = False

    @property
    def reading(self) -> bool:
        """Whether a thread is currently inside ``read``."""
        with self._lock:
            return self._reading

    def read(self, size: int) -> str:
        with self._lock:
            self._reading = True
        try:
            return self._source.read(size)
        finally:
            with self._lock:
                self._reading = False

    def close(self) -> None:
        self._source.close()


class StreamingPipe:
    """Readable stream of transformed lines backed by a producer thread.

    The pipe takes ownership of ``source`` and closes it when the source
    is exhausted, when production fails, or when the pipe is closed.
    """

    def __init__(
        self,
        source: TextSource,
        transforms: Iterable[LineTransform] = (),
        config: PipeConfig | None = None,
        name: str | None = None,
    ) -> None:
        self._source = _TrackedSource(source)
        self._config = config if config is not None else PipeConfig.from_env()
        self._name = name or f"{PIPE_NAME_PREFIX}-{next(_PIPE_IDS)}"
        self._transform = compose_all(transforms)
        self._channel = BoundedChannel(self._config.channel_capacity)
        self._state_lock = threading.Lock()
        self._source_lock = threading.Lock()
        self._stop_requested = threading.Event()
        self._state = PipeState.IDLE
        self._failure: LinePipeError | None = None
        self._close_requested = False
        self._source_released = False
        self._pending = ""
        self._producer = threading.Thread(target=self._produce, name=self._name, daemon=True)
        self._state = PipeState.RUNNING
        _LOGGER.info(
            "pipe_started",
            pipe=self._name,
            transform=describe_transform(self._transform),
            channel_capacity=self._config.channel_capacity,
        )
        self._producer.start()

    @property
    def name(self) -> str:
        """Pipe name, also used for the producer thread."""
        return self._name

    @property
    def state(self) -> PipeState:
        """Current lifecycle state."""
        with self._state_lock:
            return self._state

    @property
    def closed(self) -> bool:
        """Whether no further lines can be read."""
        return self.state is not PipeState.RUNNING

    @property
    def producer_running(self) -> bool:
        """Whether the producer thread is still alive."""
        return self._producer.is_alive()

    def read_numbered_line(
        self,
        timeout: float | None | _TimeoutDefault = _CONFIGURED_TIMEOUT,
    ) -> Line | None:
        """Return the next transformed line with its sequence number.

        Text already buffered by ``read`` or ``readline`` is not seen here.

        Args:
            timeout: Wait bound in seconds. Omitted means the configured
                read timeout; an explicit None waits without a limit.

        Returns:
            Next line, or None at end of stream or after close.

        Raises:
            LinePipeError: The production failure, on this and every later read.
            ReadTimeoutError: If no line arrived in time; the pipe stays usable.
        """
        with self._state_lock:
            if self._state is PipeState.FAILED and self._failure is not None:
                raise self._failure
            if self._state is not PipeState.RUNNING:
                return None
        wait = self._config.read_timeout if timeout is _CONFIGURED_TIMEOUT else timeout
        try:
            message = self._channel.get(wait)
        except ChannelClosedError:
            return None
        if isinstance(message, Line):
            return message
        if isinstance(message, EndOfStream):
            self._finish(PipeState.COMPLETED)
            _LOGGER.info("pipe_completed", pipe=self._name, line_count=message.line_count)
            return None
        return self._fail(message)

    def read_line(
        self,
        timeout: float | None | _TimeoutDefault = _CONFIGURED_TIMEOUT,
    ) -> str | None:
        """Return the next transformed line text, or None at end of stream.

        ``timeout`` behaves as in ``read_numbered_line``.
        """
        if self._pending:
            return self.readline()[:-1]
        line = self.read_numbered_line(timeout)
        return None if line is None else line.text

    def readline(self) -> str:
        """Return the next line with a trailing newline, or ``""`` at end."""
        if self._pending:
            head, separator, self._pending = self._pending.partition("\n")
            return head + separator
        line = self.read_numbered_line()
        return "" if line is None else line.text + "\n"

    def read(self, size: int | None = -1) -> str:
        """Read up to ``size`` characters of newline-joined output.

        Args:
            size: Maximum characters to return, negative or None reads all.

        Returns:
            Text chunk, empty at end of stream.
        """
        if size is None or size < 0:
            chunks = [self._pending]
            self._pending = ""
            while True:
                line = self.read_numbered_line()
                if line is None:
                    return "".join(chunks)
                chunks.append(line.text + "\n")
        while len(self._pending) < size:
            line = self.read_numbered_line()
            if line is None:
                break
            self._pending += line.text + "\n"
        chunk, self._pending = self._pending[:size], self._pending[size:]
        return chunk

    def close(self) -> None:
        """Stop production, release the source, and end the stream.

        Safe to call repeatedly and from any thread. Readers blocked in
        ``read_line`` wake up with end of stream.
        """
        with self._state_lock:
            if self._close_requested:
                return
            self._close_requested = True
            if self._state is PipeState.RUNNING:
                self._state = PipeState.CLOSED
        self._stop_requested.set()
        self._channel.close()
        self._pending = ""
        if threading.current_thread() is not self._producer:
            self._join_producer()
        self._release_source()
        _LOGGER.info("pipe_closed", pipe=self._name, state=self.state.value)

    def __iter__(self) -> Iterator[str]:
        """Yield transformed line texts without terminators."""
        while True:
            text = self.read_line()
            if text is None:
                return
            yield text

    def __enter__(self) -> "StreamingPipe":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def _produce(self) -> None:
        reader = LineReader(self._source, self._config.read_chunk_size)
        line_number = 0
        try:
            while not self._stop_requested.is_set():
                raw_text = reader.read_line()
                if raw_text is None:
                    self._release_source()
                    self._channel.put(EndOfStream(line_count=line_number))
                    return
                line_number += 1
                text = _apply_transform(self._transform, line_number, raw_text)
                if not self._channel.put(Line(number=line_number, text=text)):
                    return
        except LinePipeError as error:
            self._release_source()
            self._channel.put(Failure(error=error))
        finally:
            self._release_source()

    def _join_producer(self) -> None:
        deadline = time.monotonic() + self._config.close_timeout
        while self._producer.is_alive():
            # A producer parked in source.read() only wakes once the source is closed.
            if self._source.reading:
                self._release_source()
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                # Still inside a slow read or transform; the daemon thread is left behind.
                _LOGGER.warning(
                    "producer_join_timeout",
                    pipe=self._name,
                    close_timeout=self._config.close_timeout,
                )
                return
            self._producer.join(min(remaining, _JOIN_POLL_SECONDS))

    def _fail(self, failure: Failure) -> NoReturn:
        with self._state_lock:
            self._state = PipeState.FAILED
            self._failure = failure.error
        _LOGGER.error(
            "pipe_failed",
            pipe=self._name,
            error_type=type(failure.error).__name__,
            error=str(failure.error),
        )
        raise failure.error

    def _finish(self, state: PipeState) -> None:
        with self._state_lock:
            if self._state is PipeState.RUNNING:
                self._state = state

    def _release_source(self) -> None:
        with self._source_lock:
            if self._source_released:
                return
            self._source_released = True
        try:
            self._source.close()
        except Exception as error:
            _LOGGER.warning("source_close_failed", pipe=self._name, error=str(error))


def _apply_transform(transform: LineTransform, line_number: int, text: str) -> str:
    """Apply the composed transform and wrap caller failures.

    Args:
        transform: Composed line transform.
        line_number: One-based line number.
        text: Raw line text.

    Returns:
        Transformed line text.

    Raises:
        TransformError: If the transform raises.
    """
    try:
        return transform(line_number, text)
    except Exception as error:
        raise TransformError(
            f"Transform {describe_transform(transform)} failed on line {line_number}: {error}"
        ) from error

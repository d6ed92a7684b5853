"""Bounded blocking handoff channel.

This module provides the single shared structure between a pipe's
producer and consumer. Publishing blocks while the channel is full and
receiving blocks while it is empty. Closing wakes both sides: a blocked
publish returns False and a blocked receive raises ChannelClosedError.
"""

from __future__ import annotations

from collections import deque
import threading

from core.errors import ChannelClosedError, PipeConfigError, ReadTimeoutError
from core.types import ChannelMessage


class BoundedChannel:
    """Order-preserving channel with fixed capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise PipeConfigError(f"Invalid channel capacity {capacity}: expected at least 1.")
        self._capacity = capacity
        self._messages: deque[ChannelMessage] = deque()
        self._condition = threading.Condition()
        self._closed = False

    @property
    def capacity(self) -> int:
        """Maximum number of buffered messages."""
        return self._capacity

    @property
    def closed(self) -> bool:
        """Whether ``close`` has been called."""
        with self._condition:
            return self._closed

    def put(self, message: ChannelMessage) -> bool:
        """Publish one message, waiting for free capacity.

        Args:
            message: Message to append.

        Returns:
            True when published, False when the channel is closed.
        """
        with self._condition:
            self._condition.wait_for(self._has_room_or_closed)
            if self._closed:
                return False
            self._messages.append(message)
            self._condition.notify_all()
            return True

    def get(self, timeout: float | None = None) -> ChannelMessage:
        """Receive the oldest message, waiting until one is available.

        Args:
            timeout: Optional bound in seconds, None waits forever.

        Returns:
            Oldest published message.

        Raises:
            ReadTimeoutError: If no message arrived within ``timeout``.
            ChannelClosedError: If the channel is closed.
        """
        with self._condition:
            if not self._condition.wait_for(self._has_message_or_closed, timeout):
                raise ReadTimeoutError(f"No line became available within {timeout} seconds.")
            if self._closed:
                raise ChannelClosedError("Channel is closed.")
            message = self._messages.popleft()
            self._condition.notify_all()
            return message

    def close(self) -> None:
        """Close the channel, dropping buffered messages and waking waiters."""
        with self._condition:
            self._closed = True
            self._messages.clear()
            self._condition.notify_all()

    def _has_room_or_closed(self) -> bool:
        return self._closed or len(self._messages) < self._capacity

    def _has_message_or_closed(self) -> bool:
        return self._closed or bool(self._messages)

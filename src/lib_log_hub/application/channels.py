"""Bounded channel and shutdown handshake used between dispatcher and backends.

Purpose
-------
Give every receiver a bounded, thread-safe inbound queue with hard
backpressure, plus an explicit shutdown signal the consume loop acknowledges.

Contents
--------
* :class:`Channel` - bounded FIFO whose ``put`` blocks while full.
* :class:`ShutdownSignal` - unbuffered "stop" handshake bound to a channel.

System Role
-----------
The dispatcher feeds backends through :class:`Channel` instances obtained from
``BackendPort.exchange_channels``; a hot-swap seals the old channel through its
:class:`ShutdownSignal`, waits for the loop to acknowledge, then drains it.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Generic, TypeVar

from lib_log_hub.domain.errors import ChannelClosedError

T = TypeVar("T")


class Channel(Generic[T]):
    """Bounded FIFO channel shared by one producer side and one consume loop.

    Examples
    --------
    >>> channel = Channel(2)
    >>> channel.put("a"), channel.offer("b"), channel.offer("c")
    (True, True, False)
    >>> channel.receive(), len(channel)
    ('a', 1)
    >>> channel.seal()
    >>> channel.receive() is None, channel.poll()
    (True, 'b')
    """

    def __init__(self, capacity: int) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ValueError(f"channel capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._items: deque[T] = deque()
        self._cond = threading.Condition()
        self._sealed = False
        self._closed = False
        self._rejected = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def sealed(self) -> bool:
        """Return ``True`` once intake has stopped."""

        return self._sealed

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def rejected(self) -> int:
        """Return how many :meth:`offer` calls were refused."""

        return self._rejected

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def empty(self) -> bool:
        return len(self) == 0

    def put(self, item: T, timeout: float | None = None) -> bool:
        """Append ``item``, blocking while the channel is full.

        Returns ``False`` only when ``timeout`` elapses first. Raises
        :class:`ChannelClosedError` when the channel is sealed before or while
        waiting for room.
        """
        with self._cond:
            if self._sealed:
                raise ChannelClosedError("channel is sealed")
            has_room = self._cond.wait_for(lambda: self._sealed or len(self._items) < self._capacity, timeout)
            if self._sealed:
                raise ChannelClosedError("channel was sealed while waiting for room")
            if not has_room:
                return False
            self._items.append(item)
            self._cond.notify_all()
            return True

    def offer(self, item: T) -> bool:
        """Append ``item`` without blocking; return ``False`` when full or sealed."""
        with self._cond:
            if self._sealed or len(self._items) >= self._capacity:
                self._rejected += 1
                return False
            self._items.append(item)
            self._cond.notify_all()
            return True

    def receive(self) -> T | None:
        """Block until an item arrives or the channel is sealed.

        A sealed channel returns ``None`` immediately, even when items remain;
        those are left for :meth:`poll`-based draining.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._sealed or bool(self._items))
            if self._sealed:
                return None
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def poll(self) -> T | None:
        """Pop the oldest item without blocking, or return ``None`` when empty."""
        with self._cond:
            if not self._items:
                return None
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def seal(self) -> None:
        """Stop intake and wake every waiter."""
        with self._cond:
            self._sealed = True
            self._cond.notify_all()

    def close(self) -> None:
        """Seal the channel and discard anything still stored."""
        with self._cond:
            self._sealed = True
            self._closed = True
            self._items.clear()
            self._cond.notify_all()


class ShutdownSignal:
    """Unbuffered stop handshake for the loop consuming ``channel``.

    :meth:`send` seals the channel, which wakes a loop blocked in
    :meth:`Channel.receive`, then waits until the loop calls
    :meth:`acknowledge` on its way out.
    """

    def __init__(self, channel: Channel[Any]) -> None:
        self._channel = channel
        self._requested = threading.Event()
        self._acknowledged = threading.Event()
        self._closed = False

    def send(self, timeout: float | None = None) -> bool:
        """Signal shutdown; return ``True`` once the loop has acknowledged it."""
        if self._closed:
            raise ChannelClosedError("shutdown signal is closed")
        self._requested.set()
        self._channel.seal()
        return self._acknowledged.wait(timeout)

    def is_set(self) -> bool:
        return self._requested.is_set()

    def acknowledge(self) -> None:
        """Called by the consume loop when it stops reading."""

        self._acknowledged.set()

    @property
    def acknowledged(self) -> bool:
        return self._acknowledged.is_set()

    def close(self) -> None:
        self._closed = True


__all__ = ["Channel", "ShutdownSignal"]

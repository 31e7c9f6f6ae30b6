"""Shared channel lifecycle for backends that render one message at a time.

Purpose
-------
Implement the parts of :class:`BackendPort` that every queue-fed adapter has in
common: level/buffer validation, channel allocation, the consume loop, the
synchronous drain, and asynchronous error reporting.

Contents
--------
* :class:`ChannelBackend` - base class; subclasses implement ``init`` and
  ``_write``.

System Role
-----------
Concrete adapters (console, file) only decide how a message is rendered. A
failing ``_write`` never propagates: it becomes a :class:`BackendWriteError`
offered on the shared error channel and is dropped when that channel is full.
"""

from __future__ import annotations

from typing import Any

from lib_log_hub.application.channels import Channel, ShutdownSignal
from lib_log_hub.application.ports.backend import BackendPort
from lib_log_hub.domain.errors import BackendWriteError, InvalidBufferSizeError, InvalidLevelError
from lib_log_hub.domain.levels import Severity
from lib_log_hub.domain.message import Message


class ChannelBackend(BackendPort):
    """Base class wiring a bounded inbound channel to a render callback."""

    kind = "backend"

    def __init__(self) -> None:
        self._level: Severity | None = None
        self._inbound: Channel[Message] | None = None
        self._shutdown: ShutdownSignal | None = None
        self._errors: Channel[BackendWriteError] | None = None

    def level(self) -> Severity:
        if self._level is None:
            raise RuntimeError(f"{self.kind} backend has not been initialised")
        return self._level

    def init(self, config: Any) -> None:  # pragma: no cover - subclasses override
        raise NotImplementedError

    def exchange_channels(
        self, errors: Channel[BackendWriteError], *, kind: str | None = None
    ) -> tuple[Channel[Message], ShutdownSignal]:
        inbound, shutdown = self._channels()
        self._errors = errors
        if kind is not None:
            self.kind = kind
        return inbound, shutdown

    def start(self) -> None:
        """Render messages until the shutdown signal seals the inbound channel."""
        inbound, _ = self._channels()
        while True:
            message = inbound.receive()
            if message is None:
                return
            self._render(message)

    def flush(self) -> None:
        """Render whatever is still queued; intake is already stopped by then."""
        inbound, _ = self._channels()
        while (message := inbound.poll()) is not None:
            self._render(message)

    def destroy(self) -> None:
        inbound, shutdown = self._channels()
        inbound.close()
        shutdown.close()
        self._close_resources()

    def _allocate(self, level: Any, buffer_size: Any) -> None:
        """Validate the common settings and allocate the inbound channel."""
        if not Severity.is_valid(level):
            raise InvalidLevelError(level)
        if isinstance(buffer_size, bool) or not isinstance(buffer_size, int) or buffer_size < 1:
            raise InvalidBufferSizeError(buffer_size)
        self._level = level
        self._inbound = Channel(buffer_size)
        self._shutdown = ShutdownSignal(self._inbound)

    def _channels(self) -> tuple[Channel[Message], ShutdownSignal]:
        if self._inbound is None or self._shutdown is None:
            raise RuntimeError(f"{self.kind} backend has not been initialised")
        return self._inbound, self._shutdown

    def _render(self, message: Message) -> None:
        try:
            self._write(message)
        except Exception as exc:  # noqa: BLE001
            self._report(BackendWriteError(self.kind, message, exc))

    def _report(self, error: BackendWriteError) -> None:
        if self._errors is not None:
            self._errors.offer(error)

    def _write(self, message: Message) -> None:  # pragma: no cover - subclasses override
        raise NotImplementedError

    def _close_resources(self) -> None:
        """Release adapter-specific resources; the default has none."""


__all__ = ["ChannelBackend"]

"""Backend port describing the capability set every adapter provides.

Purpose
-------
Define the contract between the dispatcher and pluggable backends (console,
file, ...), so the application layer never depends on a concrete adapter.

Contents
--------
* :class:`BackendPort` - runtime-checkable protocol with the lifecycle calls.
* :data:`BackendFactory` - zero-argument constructor stored in the registry.

System Role
-----------
The registry maps a kind to a :data:`BackendFactory`; the dispatcher calls the
methods below in a fixed order: ``init`` -> ``exchange_channels`` -> ``start``
(on its own thread) and, on retirement, ``flush`` -> ``destroy``.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from lib_log_hub.application.channels import Channel, ShutdownSignal
from lib_log_hub.domain.errors import BackendWriteError
from lib_log_hub.domain.levels import Severity
from lib_log_hub.domain.message import Message


@runtime_checkable
class BackendPort(Protocol):
    """Pluggable consumer of log messages with its own minimum severity."""

    def level(self) -> Severity:
        """Return the minimum severity; valid only after :meth:`init`."""

    def init(self, config: Any) -> None:
        """Validate ``config`` and allocate the bounded inbound channel.

        Raises :class:`~lib_log_hub.domain.errors.ConfigurationError` when the
        configuration has the wrong type or holds invalid values.
        """

    def exchange_channels(
        self, errors: Channel[BackendWriteError], *, kind: str | None = None
    ) -> tuple[Channel[Message], ShutdownSignal]:
        """Retain the shared error channel and return inbound + shutdown handles.

        ``kind`` is the name the backend was registered under; write errors
        reported on ``errors`` carry it.
        """

    def start(self) -> None:
        """Run the consume loop until shutdown is signalled (blocking)."""

    def flush(self) -> None:
        """Render every message still queued, then return."""

    def destroy(self) -> None:
        """Release channels and other resources."""


BackendFactory = Callable[[], BackendPort]


__all__ = ["BackendFactory", "BackendPort"]

"""Use case turning an emission call into a fanned-out :class:`Message`.

Purpose
-------
Honour the emission contract of the dispatch core: build one immutable message
and push it to every active backend whose minimum severity admits it, using a
snapshot of the receivers and without holding the dispatcher's writer lock.

Contents
--------
* :class:`EmitCallable` - protocol of the returned callable.
* :func:`create_emit` - factory freezing the dispatcher wiring.
"""

from __future__ import annotations

from typing import Any, Protocol

from lib_log_hub.application.dispatcher import Dispatcher
from lib_log_hub.domain.levels import Severity
from lib_log_hub.domain.message import Message


class EmitCallable(Protocol):
    def __call__(self, severity: Severity, body: str, *args: Any) -> int: ...


def create_emit(dispatcher: Dispatcher, *, timeout: float | None = None) -> EmitCallable:
    """Build the emission callable bound to ``dispatcher``.

    ``timeout`` bounds how long a full inbound channel may block the caller;
    ``None`` keeps the lossless blocking behaviour.

    Examples
    --------
    >>> from lib_log_hub.application.registry import BackendRegistry
    >>> with Dispatcher(BackendRegistry()) as dispatcher:
    ...     emit = create_emit(dispatcher)
    ...     emit(Severity.INFO, "%d backends", 0)
    0
    """

    def emit(severity: Severity, body: str, *args: Any) -> int:
        """Render ``body`` with ``args`` and return how many backends accepted it."""
        text = body % args if args else body
        return dispatcher.dispatch(Message(severity, text), timeout)

    return emit


__all__ = ["EmitCallable", "create_emit"]

"""Runtime façade wiring the dispatch core into a process-wide logger.

Purpose
-------
Expose a stable entry point (``register``, ``init``, ``activate``, the
severity helpers, ``shutdown``) that host applications use instead of
importing the inner layers directly.

Contents
--------
* ``register`` – initialisation-phase registration of backend factories.
* ``init`` – composition root assembling the dispatcher and console backend.
* ``activate`` – activation entry point; replaces a live backend of the same kind.
* ``trace`` / ``info`` / ``warn`` / ``error`` / ``fatal`` – emission API.
* ``shutdown`` / ``shutdown_async`` – deterministic teardown paths.
* ``inspect_runtime`` / ``summary_info`` – read-only views.

System Role
-----------
Forms the outer shell: the process-wide context lives in :mod:`._state`,
while the dispatcher and adapters stay injectable for isolated tests.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, NoReturn

from lib_log_hub.application.dispatcher import DiagnosticHook
from lib_log_hub.application.ports.backend import BackendFactory
from lib_log_hub.domain.levels import Severity

from ._composition import build_runtime
from ._settings import build_runtime_settings
from ._state import backend_registry, clear_runtime, current_runtime, is_initialised, set_runtime


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the active logging runtime."""

    active_kinds: tuple[str, ...]
    levels: Mapping[str, Severity]
    registered_kinds: tuple[str, ...]
    dropped_errors: int


__all__ = [
    "RuntimeSnapshot",
    "activate",
    "error",
    "fatal",
    "info",
    "init",
    "inspect_runtime",
    "is_initialised",
    "register",
    "registered_kinds",
    "shutdown",
    "shutdown_async",
    "summary_info",
    "trace",
    "warn",
]


def register(kind: str, factory: BackendFactory) -> None:
    """Register a backend factory in the process-wide registry.

    Call during start-up only, before :func:`init`. Registering ``None`` or a
    duplicate kind raises :class:`~lib_log_hub.domain.errors.RegistrationError`.
    """

    backend_registry().register(kind, factory)


def registered_kinds() -> tuple[str, ...]:
    return backend_registry().kinds()


def init(
    *,
    console_level: str | Severity = Severity.INFO,
    buffer_size: int = 100,
    enable_console: bool = True,
    error_buffer_size: int = 5,
    shutdown_timeout: float | None = 5.0,
    emit_timeout: float | None = None,
    force_color: bool = False,
    no_color: bool = False,
    diagnostic_hook: DiagnosticHook = None,
) -> None:
    """Compose the logging runtime according to configuration inputs.

    Inputs
    ------
    console_level, buffer_size:
        Minimum severity and inbound capacity of the console backend.
    enable_console:
        Activate the console backend immediately; other kinds are added later
        through :func:`activate`.
    error_buffer_size:
        Capacity of the shared error channel; write errors beyond it are dropped.
    shutdown_timeout:
        Seconds to wait for a consume loop to acknowledge shutdown.
    emit_timeout:
        Bound on how long a full backend queue may block an emitting caller;
        ``None`` blocks until room is available.
    force_color, no_color, diagnostic_hook:
        Console colour overrides and an optional ``(name, payload)`` callback
        invoked for every reported write error.

    Side Effects
    ------------
    Raises :class:`RuntimeError` if called while a runtime is already active.
    Starts the error loop thread and one consume thread per backend.
    """

    if is_initialised():
        raise RuntimeError(
            "lib_log_hub.init() cannot be called twice without shutdown(); call lib_log_hub.shutdown() first",
        )

    settings = build_runtime_settings(
        console_level=console_level,
        buffer_size=buffer_size,
        enable_console=enable_console,
        error_buffer_size=error_buffer_size,
        shutdown_timeout=shutdown_timeout,
        emit_timeout=emit_timeout,
        force_color=force_color,
        no_color=no_color,
        diagnostic_hook=diagnostic_hook,
    )
    runtime = build_runtime(settings, backend_registry())
    set_runtime(runtime)


def activate(kind: str, config: Any) -> None:
    """Activate (or hot-swap) the backend ``kind`` with ``config``.

    Raises :class:`~lib_log_hub.domain.errors.UnknownKindError` or
    :class:`~lib_log_hub.domain.errors.ActivationError`; on failure the
    previous backend of ``kind`` keeps running.
    """

    current_runtime().dispatcher.activate(kind, config)


def trace(body: str, *args: Any) -> int:
    """Emit a ``TRACE`` message; returns how many backends accepted it."""
    return current_runtime().emit(Severity.TRACE, body, *args)


def info(body: str, *args: Any) -> int:
    """Emit an ``INFO`` message; returns how many backends accepted it."""
    return current_runtime().emit(Severity.INFO, body, *args)


def warn(body: str, *args: Any) -> int:
    """Emit a ``WARN`` message; returns how many backends accepted it."""
    return current_runtime().emit(Severity.WARN, body, *args)


def error(body: str, *args: Any) -> int:
    """Emit an ``ERROR`` message; returns how many backends accepted it."""
    return current_runtime().emit(Severity.ERROR, body, *args)


def fatal(body: str, *args: Any) -> NoReturn:
    """Emit a ``FATAL`` message, drain every backend, and exit with status 1."""

    runtime = current_runtime()
    runtime.emit(Severity.FATAL, body, *args)
    runtime.dispatcher.shutdown()
    clear_runtime()
    raise SystemExit(1)


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only snapshot of the current runtime state."""

    dispatcher = current_runtime().dispatcher
    return RuntimeSnapshot(
        active_kinds=dispatcher.active_kinds(),
        levels=MappingProxyType(dispatcher.levels()),
        registered_kinds=dispatcher.registry.kinds(),
        dropped_errors=dispatcher.dropped_errors,
    )


def shutdown() -> None:
    """Drain every backend and clear the runtime synchronously.

    Raises :class:`RuntimeError` when invoked inside a running event loop to
    steer callers to :func:`shutdown_async`.
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None
    if loop is not None and loop.is_running():
        raise RuntimeError(
            "lib_log_hub.shutdown() cannot run inside an active event loop; await lib_log_hub.shutdown_async() instead",
        )
    asyncio.run(shutdown_async())


async def shutdown_async() -> None:
    """Drain every backend without blocking the event loop, then clear state."""

    runtime = current_runtime()
    await runtime.shutdown_async()
    clear_runtime()


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point and docs."""

    from .. import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)

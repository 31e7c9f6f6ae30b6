"""Runtime state container, process-wide registry, and access helpers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable

from lib_log_hub.adapters import CONSOLE, FILE, create_console_backend, create_file_backend
from lib_log_hub.application.dispatcher import Dispatcher
from lib_log_hub.application.registry import BackendRegistry
from lib_log_hub.application.use_cases.emit import EmitCallable

from ._settings import RuntimeSettings


@dataclass(slots=True)
class LoggingRuntime:
    """Aggregate of live collaborators assembled by the composition root."""

    dispatcher: Dispatcher
    emit: EmitCallable
    shutdown_async: Callable[[], asyncio.Future | Any]
    settings: RuntimeSettings


_STATE: LoggingRuntime | None = None
_STATE_LOCK = RLock()
_REGISTRY: BackendRegistry | None = None


def backend_registry() -> BackendRegistry:
    """Return the process-wide registry, creating it with the built-in kinds."""

    global _REGISTRY
    with _STATE_LOCK:
        if _REGISTRY is None:
            registry = BackendRegistry()
            registry.register(CONSOLE, create_console_backend)
            registry.register(FILE, create_file_backend)
            _REGISTRY = registry
        return _REGISTRY


def set_runtime(runtime: LoggingRuntime) -> None:
    """Install ``runtime`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = runtime


def clear_runtime() -> None:
    """Remove the active runtime if present."""

    with _STATE_LOCK:
        global _STATE
        _STATE = None


def current_runtime() -> LoggingRuntime:
    """Return the active runtime or raise when uninitialised."""

    with _STATE_LOCK:
        if _STATE is None:
            raise RuntimeError("lib_log_hub.init() must be called before using the logging API")
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` when :func:`lib_log_hub.init` has been called."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = [
    "LoggingRuntime",
    "backend_registry",
    "clear_runtime",
    "current_runtime",
    "is_initialised",
    "set_runtime",
]

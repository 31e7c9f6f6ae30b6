"""Runtime composition helpers wiring the dispatcher, backends, and use cases.

Purpose
-------
Translate ``RuntimeSettings`` into the live ``LoggingRuntime`` singleton. The
helpers keep wiring small, declarative, and testable.
"""

from __future__ import annotations

from lib_log_hub.adapters import CONSOLE, ConsoleConfig
from lib_log_hub.application.dispatcher import Dispatcher
from lib_log_hub.application.registry import BackendRegistry
from lib_log_hub.application.use_cases.emit import create_emit
from lib_log_hub.application.use_cases.shutdown import create_shutdown

from ._settings import RuntimeSettings
from ._state import LoggingRuntime


__all__ = ["build_runtime"]


def build_runtime(settings: RuntimeSettings, registry: BackendRegistry) -> LoggingRuntime:
    """Assemble and start the logging runtime from resolved settings.

    The dispatcher is shut down again when activating the console backend
    fails, so a failed ``init`` leaves no threads behind.
    """

    dispatcher = _create_dispatcher(settings, registry)
    dispatcher.start()
    try:
        if settings.console.enabled:
            dispatcher.activate(CONSOLE, _console_config(settings))
    except BaseException:
        dispatcher.shutdown()
        raise

    return LoggingRuntime(
        dispatcher=dispatcher,
        emit=create_emit(dispatcher, timeout=settings.emit_timeout),
        shutdown_async=create_shutdown(dispatcher=dispatcher),
        settings=settings,
    )


def _create_dispatcher(settings: RuntimeSettings, registry: BackendRegistry) -> Dispatcher:
    return Dispatcher(
        registry,
        error_buffer_size=settings.error_buffer_size,
        shutdown_timeout=settings.shutdown_timeout,
        diagnostic=settings.diagnostic_hook,
    )


def _console_config(settings: RuntimeSettings) -> ConsoleConfig:
    console = settings.console
    return ConsoleConfig(
        level=console.level,
        buffer_size=console.buffer_size,
        force_color=console.force_color,
        no_color=console.no_color,
    )

"""Public package surface of the pluggable logging core.

``import lib_log_hub`` exposes the runtime facade (registration, activation,
emission, shutdown) plus the value types hosts need to configure backends.
"""

from __future__ import annotations

from .adapters import CONSOLE, FILE, ConsoleConfig, FileConfig
from .domain import (
    ActivationError,
    BackendWriteError,
    ConfigObjectError,
    ConfigurationError,
    InvalidBufferSizeError,
    InvalidLevelError,
    LogHubError,
    Message,
    RegistrationError,
    Severity,
    UnknownKindError,
)
from .runtime import (
    RuntimeSnapshot,
    activate,
    error,
    fatal,
    info,
    init,
    inspect_runtime,
    is_initialised,
    register,
    registered_kinds,
    shutdown,
    shutdown_async,
    summary_info,
    trace,
    warn,
)

__all__ = [
    "ActivationError",
    "BackendWriteError",
    "CONSOLE",
    "ConfigObjectError",
    "ConfigurationError",
    "ConsoleConfig",
    "FILE",
    "FileConfig",
    "InvalidBufferSizeError",
    "InvalidLevelError",
    "LogHubError",
    "Message",
    "RegistrationError",
    "RuntimeSnapshot",
    "Severity",
    "UnknownKindError",
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

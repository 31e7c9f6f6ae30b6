"""Runtime settings resolved from keyword arguments and environment overrides.

Environment variables win over the arguments passed to :func:`lib_log_hub.init`
so deployments can retune logging without code changes:

``LOG_CONSOLE_LEVEL``, ``LOG_CONSOLE_BUFFER_SIZE``, ``LOG_ENABLE_CONSOLE``,
``LOG_ERROR_BUFFER_SIZE``, ``LOG_SHUTDOWN_TIMEOUT``, ``LOG_EMIT_TIMEOUT``,
``LOG_FORCE_COLOR`` and ``LOG_NO_COLOR``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from lib_log_hub.application.dispatcher import DiagnosticHook
from lib_log_hub.domain.levels import Severity


@dataclass(frozen=True, slots=True)
class ConsoleSettings:
    enabled: bool
    level: Severity
    buffer_size: int
    force_color: bool
    no_color: bool


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Fully validated inputs for :func:`build_runtime`."""

    console: ConsoleSettings
    error_buffer_size: int
    shutdown_timeout: float | None
    emit_timeout: float | None
    diagnostic_hook: DiagnosticHook = None


def build_runtime_settings(
    *,
    console_level: str | Severity,
    buffer_size: int,
    enable_console: bool,
    error_buffer_size: int,
    shutdown_timeout: float | None,
    emit_timeout: float | None,
    force_color: bool,
    no_color: bool,
    diagnostic_hook: DiagnosticHook = None,
) -> RuntimeSettings:
    """Merge arguments with environment overrides and validate the result."""

    console = ConsoleSettings(
        enabled=_env_bool("LOG_ENABLE_CONSOLE", enable_console),
        level=coerce_level(os.getenv("LOG_CONSOLE_LEVEL") or console_level),
        buffer_size=_env_positive_int("LOG_CONSOLE_BUFFER_SIZE", buffer_size),
        force_color=_env_bool("LOG_FORCE_COLOR", force_color),
        no_color=_env_bool("LOG_NO_COLOR", no_color),
    )
    return RuntimeSettings(
        console=console,
        error_buffer_size=_env_positive_int("LOG_ERROR_BUFFER_SIZE", error_buffer_size),
        shutdown_timeout=_env_timeout("LOG_SHUTDOWN_TIMEOUT", shutdown_timeout),
        emit_timeout=_env_timeout("LOG_EMIT_TIMEOUT", emit_timeout),
        diagnostic_hook=diagnostic_hook,
    )


def coerce_level(level: str | Severity) -> Severity:
    """Normalise level inputs (string or enum) into :class:`Severity`.

    Examples
    --------
    >>> coerce_level("warn") is Severity.WARN
    True
    >>> coerce_level(Severity.ERROR) is Severity.ERROR
    True
    """
    if isinstance(level, Severity):
        return level
    return Severity.from_name(level)


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = '0'
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    >>> del os.environ['LOG_EXAMPLE_BOOL']
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        value = default
    else:
        try:
            value = int(raw.strip())
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return value


def _env_timeout(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        value = default
    elif raw.strip().lower() in {"none", "off", "inf"}:
        return None
    else:
        try:
            value = float(raw.strip())
        except ValueError as exc:
            raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from exc
    if value is not None and value <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return value


__all__ = ["ConsoleSettings", "RuntimeSettings", "build_runtime_settings", "coerce_level"]

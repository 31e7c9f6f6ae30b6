"""Error taxonomy for registration, activation, and backend failures.

Purpose
-------
Keep the three error classes of the dispatch core apart:

* programming errors (:class:`RegistrationError`) that must abort start-up,
* caller-facing recoverable errors (:class:`UnknownKindError`,
  :class:`ConfigurationError` and :class:`ActivationError`),
* asynchronous write failures (:class:`BackendWriteError`) carried on the
  shared error channel.
"""

from __future__ import annotations

from typing import Any

from .message import Message


class LogHubError(Exception):
    """Base class for every error raised by lib_log_hub."""


class RegistrationError(LogHubError):
    """A backend factory was registered twice or as ``None``.

    Raised during process initialisation only; it signals a wiring mistake and
    is never caught by the library.
    """


class UnknownKindError(LogHubError, LookupError):
    """No factory is registered for the requested backend kind."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"unknown backend kind {kind!r}")
        self.kind = kind


class ConfigurationError(LogHubError, ValueError):
    """Base class for invalid backend configuration values."""


class ConfigObjectError(ConfigurationError):
    """The configuration object has the wrong type for the backend."""

    def __init__(self, expected: str, value: Any) -> None:
        super().__init__(f"invalid configuration object: expected {expected}, got {type(value).__name__} {value!r}")
        self.expected = expected
        self.value = value


class InvalidLevelError(ConfigurationError):
    """The configured minimum severity is not a valid :class:`Severity`."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"invalid level: {value!r}")
        self.value = value


class InvalidBufferSizeError(ConfigurationError):
    """The configured inbound buffer size is not a positive integer."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"invalid buffer size: {value!r} (must be a positive integer)")
        self.value = value


class ActivationError(LogHubError):
    """Initialising a backend failed; nothing was registered."""

    def __init__(self, kind: str, cause: BaseException) -> None:
        super().__init__(f"fail to initialize backend {kind!r}: {cause}")
        self.kind = kind
        self.cause = cause


class BackendWriteError(LogHubError):
    """A backend could not render a message; reported asynchronously."""

    def __init__(self, kind: str, message: Message | None, cause: BaseException) -> None:
        super().__init__(f"{kind}: unable to write message: {cause}")
        self.kind = kind
        self.message = message
        self.cause = cause


class ChannelClosedError(LogHubError):
    """A put was attempted on a sealed or closed channel."""


class DispatcherStateError(LogHubError, RuntimeError):
    """The dispatcher is not in a state that accepts the requested operation."""


__all__ = [
    "ActivationError",
    "BackendWriteError",
    "ChannelClosedError",
    "ConfigObjectError",
    "ConfigurationError",
    "DispatcherStateError",
    "InvalidBufferSizeError",
    "InvalidLevelError",
    "LogHubError",
    "RegistrationError",
    "UnknownKindError",
]

"""Domain entities and value objects used by the dispatch core."""

from __future__ import annotations

from .errors import (
    ActivationError,
    BackendWriteError,
    ChannelClosedError,
    ConfigObjectError,
    ConfigurationError,
    DispatcherStateError,
    InvalidBufferSizeError,
    InvalidLevelError,
    LogHubError,
    RegistrationError,
    UnknownKindError,
)
from .levels import Severity
from .message import Message

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
    "Message",
    "RegistrationError",
    "Severity",
    "UnknownKindError",
]

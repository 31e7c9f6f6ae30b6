from __future__ import annotations

import dataclasses

import pytest

from lib_log_hub.domain.errors import (
    ActivationError,
    BackendWriteError,
    ConfigObjectError,
    ConfigurationError,
    InvalidBufferSizeError,
    InvalidLevelError,
    UnknownKindError,
)
from lib_log_hub.domain.levels import Severity
from lib_log_hub.domain.message import Message


def test_message_is_immutable() -> None:
    message = Message(Severity.INFO, "hello")
    with pytest.raises(dataclasses.FrozenInstanceError):
        message.body = "changed"  # type: ignore[misc]


def test_message_requires_a_severity() -> None:
    with pytest.raises(TypeError, match="severity must be a Severity"):
        Message("INFO", "hello")  # type: ignore[arg-type]


def test_config_object_error_names_expected_type_and_value() -> None:
    error = ConfigObjectError("ConsoleConfig", {"level": "warn"})
    assert isinstance(error, ConfigurationError)
    assert isinstance(error, ValueError)
    assert "ConsoleConfig" in str(error)
    assert "{'level': 'warn'}" in str(error)
    assert error.expected == "ConsoleConfig"


def test_invalid_level_and_buffer_errors_carry_the_value() -> None:
    assert InvalidLevelError(7).value == 7
    assert "invalid level: 7" in str(InvalidLevelError(7))
    assert "must be a positive integer" in str(InvalidBufferSizeError(0))


def test_unknown_kind_error_is_a_lookup_error() -> None:
    error = UnknownKindError("syslog")
    assert isinstance(error, LookupError)
    assert error.kind == "syslog"
    assert "'syslog'" in str(error)


def test_activation_error_keeps_cause() -> None:
    cause = InvalidLevelError("loud")
    error = ActivationError("console", cause)
    assert error.cause is cause
    assert "fail to initialize backend 'console'" in str(error)


def test_backend_write_error_describes_kind_and_cause() -> None:
    message = Message(Severity.ERROR, "boom")
    error = BackendWriteError("file", message, OSError("disk full"))
    assert error.message is message
    assert str(error) == "file: unable to write message: disk full"

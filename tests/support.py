"""Test doubles shared across the suite."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from lib_log_hub.adapters._channel_backend import ChannelBackend
from lib_log_hub.domain.errors import ConfigObjectError
from lib_log_hub.domain.levels import Severity
from lib_log_hub.domain.message import Message


@dataclass(frozen=True)
class RecordingConfig:
    level: Severity = Severity.TRACE
    buffer_size: int = 10


class FixedClock:
    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


class RecordingBackend(ChannelBackend):
    """Backend storing rendered bodies; can be gated or forced to fail."""

    kind = "recording"

    def __init__(self, *, gate: threading.Event | None = None, fail: bool = False) -> None:
        super().__init__()
        self.records: list[str] = []
        self.threads: list[str] = []
        self.attempts = 0
        self.writing = threading.Event()
        self.destroyed = False
        self.active_writes = 0
        self.active_at_destroy: int | None = None
        self._active_lock = threading.Lock()
        self._gate = gate
        self._fail = fail

    def init(self, config: Any) -> None:
        if not isinstance(config, RecordingConfig):
            raise ConfigObjectError("RecordingConfig", config)
        self._allocate(config.level, config.buffer_size)

    def _write(self, message: Message) -> None:
        self.attempts += 1
        with self._active_lock:
            self.active_writes += 1
        self.writing.set()
        try:
            if self._gate is not None:
                self._gate.wait(timeout=5.0)
            if self._fail:
                raise OSError(f"cannot write {message.body!r}")
            self.records.append(message.body)
            self.threads.append(threading.current_thread().name)
        finally:
            with self._active_lock:
                self.active_writes -= 1

    def _close_resources(self) -> None:
        self.active_at_destroy = self.active_writes
        self.destroyed = True


class CrashingBackend(RecordingBackend):
    """Backend whose consume loop dies immediately."""

    def start(self) -> None:
        raise RuntimeError("loop crashed")


class RecordingFactory:
    """Factory remembering every backend it built, in creation order."""

    def __init__(self, backend_type: type[RecordingBackend] = RecordingBackend, **backend_kwargs: Any) -> None:
        self.created: list[RecordingBackend] = []
        self._backend_type = backend_type
        self._backend_kwargs = backend_kwargs

    def __call__(self) -> RecordingBackend:
        backend = self._backend_type(**self._backend_kwargs)
        self.created.append(backend)
        return backend

    def all_records(self) -> list[str]:
        return [record for backend in self.created for record in backend.records]


def wait_until(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    """Poll ``predicate`` until it holds or ``timeout`` elapses."""

    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()

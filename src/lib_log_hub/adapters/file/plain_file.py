"""Plain-text file backend appending one line per message.

The file is opened in append mode during ``init`` and closed in ``destroy``;
rotation and retention are left to external tooling.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from lib_log_hub.adapters._channel_backend import ChannelBackend
from lib_log_hub.adapters.clock import SystemClock
from lib_log_hub.application.ports.time import ClockPort
from lib_log_hub.domain.errors import ConfigObjectError, ConfigurationError
from lib_log_hub.domain.levels import Severity
from lib_log_hub.domain.message import Message


FILE = "file"


@dataclass(frozen=True, slots=True)
class FileConfig:
    """File backend settings; ``path`` parents are created on demand."""

    path: Path | str
    level: Severity
    buffer_size: int
    encoding: str = "utf-8"


class FileBackend(ChannelBackend):
    """Append ``<iso timestamp> [LEVEL] body`` lines to a file."""

    kind = FILE

    def __init__(self, *, clock: ClockPort | None = None) -> None:
        super().__init__()
        self._clock = clock if clock is not None else SystemClock()
        self._stream: TextIO | None = None

    def init(self, config: Any) -> None:
        if not isinstance(config, FileConfig):
            raise ConfigObjectError("FileConfig", config)
        self._allocate(config.level, config.buffer_size)
        path = Path(config.path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._stream = path.open("a", encoding=config.encoding)
        except (OSError, LookupError) as exc:
            raise ConfigurationError(f"cannot open log file {str(path)!r}: {exc}") from exc

    def _write(self, message: Message) -> None:
        if self._stream is None:
            raise RuntimeError("file backend stream is closed")
        timestamp = self._clock.now().isoformat(timespec="seconds")
        self._stream.write(f"{timestamp} [{message.severity.label}] {message.body}\n")
        self._stream.flush()

    def _close_resources(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None


def create_file_backend() -> FileBackend:
    """Default factory registered under :data:`FILE`."""

    return FileBackend()


__all__ = ["FILE", "FileBackend", "FileConfig", "create_file_backend"]

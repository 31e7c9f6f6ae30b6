"""Rich-powered console backend, the reference adapter for the dispatch core.

Purpose
-------
Render each message as one timestamped line on standard output, colouring the
body by severity.

Contents
--------
* :data:`CONSOLE` - registry kind of this backend.
* :data:`_STYLE_MAP` - severity-to-style mapping (five distinct colours).
* :class:`ConsoleConfig` - configuration accepted by :meth:`ConsoleBackend.init`.
* :class:`ConsoleBackend` - adapter produced by the registered factory.

System Role
-----------
Every future backend follows the same lifecycle: validate config and allocate
the channel in ``init``, hand channels over in ``exchange_channels``, loop in
``start``, drain in ``flush`` and release in ``destroy``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from rich.console import Console
from rich.text import Text

from lib_log_hub.adapters._channel_backend import ChannelBackend
from lib_log_hub.adapters.clock import SystemClock
from lib_log_hub.application.ports.time import ClockPort
from lib_log_hub.domain.errors import ConfigObjectError
from lib_log_hub.domain.levels import Severity
from lib_log_hub.domain.message import Message


CONSOLE = "console"

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"

#: Rich styles keyed by :class:`Severity`, lowest to highest.
_STYLE_MAP: Mapping[Severity, str] = {
    Severity.TRACE: "blue",
    Severity.INFO: "green",
    Severity.WARN: "yellow",
    Severity.ERROR: "red",
    Severity.FATAL: "bright_red",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Console backend settings.

    Attributes
    ----------
    level:
        Minimum severity the backend wants to receive.
    buffer_size:
        How many messages can be queued before emitting callers block.
    force_color, no_color:
        Colour overrides applied when the backend builds its own console.
    """

    level: Severity
    buffer_size: int
    force_color: bool = False
    no_color: bool = False


class ConsoleBackend(ChannelBackend):
    """Write colourised, timestamped lines through a Rich console."""

    kind = CONSOLE

    def __init__(
        self,
        *,
        console: Console | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        super().__init__()
        self._console = console
        self._clock = clock if clock is not None else SystemClock()

    def init(self, config: Any) -> None:
        if not isinstance(config, ConsoleConfig):
            raise ConfigObjectError("ConsoleConfig", config)
        self._allocate(config.level, config.buffer_size)
        if self._console is None:
            self._console = Console(force_terminal=True if config.force_color else None, no_color=config.no_color)

    @staticmethod
    def style_for(severity: Severity) -> str:
        return _STYLE_MAP[severity]

    @staticmethod
    def format_line(message: Message, timestamp: datetime) -> Text:
        """Return the styled line for ``message``.

        Examples
        --------
        >>> line = ConsoleBackend.format_line(Message(Severity.WARN, "disk low"), datetime(2025, 1, 2, 3, 4, 5))
        >>> line.plain
        '2025/01/02 03:04:05 disk low'
        >>> [str(span.style) for span in line.spans]
        ['yellow']
        """
        line = Text(f"{timestamp.strftime(TIMESTAMP_FORMAT)} ")
        line.append(message.body, style=_STYLE_MAP[message.severity])
        return line

    def _write(self, message: Message) -> None:
        if self._console is None:
            raise RuntimeError("console backend has not been initialised")
        line = self.format_line(message, self._clock.now())
        self._console.print(line, highlight=False, soft_wrap=True)


def create_console_backend() -> ConsoleBackend:
    """Default factory registered under :data:`CONSOLE`."""

    return ConsoleBackend()


__all__ = ["CONSOLE", "ConsoleBackend", "ConsoleConfig", "create_console_backend"]

"""System clock adapter implementing :class:`ClockPort`."""

from __future__ import annotations

from datetime import datetime

from lib_log_hub.application.ports.time import ClockPort


class SystemClock(ClockPort):
    """Return timezone-aware timestamps in the local zone, like terminal log prefixes."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


__all__ = ["SystemClock"]

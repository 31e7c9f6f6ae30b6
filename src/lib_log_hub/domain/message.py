"""Domain value describing one log event travelling to the backends.

Purpose
-------
Provide an immutable representation of an emitted message. One instance is
shared by every receiver queue, so it must never be mutated after creation.
"""

from __future__ import annotations

from dataclasses import dataclass

from .levels import Severity


@dataclass(slots=True, frozen=True)
class Message:
    """Immutable log message fanned out to active backends.

    Attributes
    ----------
    severity:
        :class:`Severity` attached by the emission API.
    body:
        Fully rendered text; backends only decorate it (timestamp, colour).
    """

    severity: Severity
    body: str

    def __post_init__(self) -> None:
        if not isinstance(self.severity, Severity):
            raise TypeError(f"severity must be a Severity, got {self.severity!r}")


__all__ = ["Message"]

"""Severity abstraction shared by the emission API and every backend.

Purpose
-------
Offer a small, totally ordered enumeration of log severities that backends use
as their minimum threshold and the emission layer uses for filtering.

Contents
--------
* :class:`Severity` enum with ordering and conversion helpers.

System Role
-----------
Domain value object: adapters read it to pick a colour, the dispatcher compares
it against ``BackendPort.level()`` before fan-out.
"""

from __future__ import annotations

from enum import Enum
from functools import total_ordering
from typing import Any


@total_ordering
class Severity(Enum):
    """Ordered log severities ``TRACE < INFO < WARN < ERROR < FATAL``."""

    TRACE = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value < other.value

    @property
    def label(self) -> str:
        """Return the upper-case name used in rendered lines."""

        return self.name

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        """Return the member matching ``name`` case-insensitively.

        Examples
        --------
        >>> Severity.from_name(" warn ") is Severity.WARN
        True
        """
        normalized = name.strip().upper()
        if normalized == "WARNING":
            normalized = "WARN"
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown severity: {name!r}") from exc

    @classmethod
    def from_numeric(cls, value: int) -> "Severity":
        """Return the member whose ordinal equals ``value``."""
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Unsupported severity numeric: {value}") from exc

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """Return ``True`` when ``value`` is a :class:`Severity` member."""

        return isinstance(value, cls)


__all__ = ["Severity"]

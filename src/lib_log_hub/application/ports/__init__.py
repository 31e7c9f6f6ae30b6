"""Protocols the application layer depends on."""

from __future__ import annotations

from .backend import BackendFactory, BackendPort
from .time import ClockPort

__all__ = ["BackendFactory", "BackendPort", "ClockPort"]

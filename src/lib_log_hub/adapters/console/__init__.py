"""Terminal backends."""

from __future__ import annotations

from .rich_console import CONSOLE, ConsoleBackend, ConsoleConfig, create_console_backend

__all__ = ["CONSOLE", "ConsoleBackend", "ConsoleConfig", "create_console_backend"]

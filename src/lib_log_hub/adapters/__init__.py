"""Concrete backends and infrastructure adapters."""

from __future__ import annotations

from .clock import SystemClock
from .console.rich_console import CONSOLE, ConsoleBackend, ConsoleConfig, create_console_backend
from .file.plain_file import FILE, FileBackend, FileConfig, create_file_backend

__all__ = [
    "CONSOLE",
    "ConsoleBackend",
    "ConsoleConfig",
    "FILE",
    "FileBackend",
    "FileConfig",
    "SystemClock",
    "create_console_backend",
    "create_file_backend",
]

"""File backends."""

from __future__ import annotations

from .plain_file import FILE, FileBackend, FileConfig, create_file_backend

__all__ = ["FILE", "FileBackend", "FileConfig", "create_file_backend"]

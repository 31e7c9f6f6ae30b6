"""Application use cases composed by the runtime."""

from __future__ import annotations

from .emit import EmitCallable, create_emit
from .shutdown import create_shutdown

__all__ = ["EmitCallable", "create_emit", "create_shutdown"]

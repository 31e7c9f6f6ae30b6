"""Shutdown orchestration for the dispatch core.

Purpose
-------
Provide a unified shutdown routine that stops intake, drains every backend,
and stops the shared error loop.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from lib_log_hub.application.dispatcher import Dispatcher


def create_shutdown(*, dispatcher: Dispatcher | None) -> Callable[[], Awaitable[None]]:
    """Return an async callable performing the shutdown sequence."""

    async def shutdown() -> None:
        """Drain backends off the event loop thread; draining may block on I/O."""
        if dispatcher is not None:
            await asyncio.to_thread(dispatcher.shutdown)

    return shutdown


__all__ = ["create_shutdown"]

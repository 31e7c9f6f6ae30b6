from __future__ import annotations

import io
from collections.abc import Iterator

import pytest
from rich.console import Console

import lib_log_hub
from lib_log_hub.application.dispatcher import Dispatcher
from lib_log_hub.application.registry import BackendRegistry


@pytest.fixture
def record_console() -> Console:
    """Rich console recording output with ANSI colours enabled."""

    return Console(file=io.StringIO(), record=True, force_terminal=True, color_system="standard", width=200)


@pytest.fixture
def registry() -> BackendRegistry:
    return BackendRegistry()


@pytest.fixture
def dispatcher(registry: BackendRegistry) -> Iterator[Dispatcher]:
    """Started dispatcher bound to an isolated registry; shut down afterwards."""

    instance = Dispatcher(registry, shutdown_timeout=5.0)
    instance.start()
    try:
        yield instance
    finally:
        instance.shutdown()


@pytest.fixture
def reset_runtime() -> Iterator[None]:
    """Shut the process-wide runtime down after the test if it is still active."""

    try:
        yield
    finally:
        if lib_log_hub.is_initialised():
            lib_log_hub.shutdown()

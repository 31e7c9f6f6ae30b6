"""Application layer: channels, registry, dispatcher, and use cases."""

from __future__ import annotations

from .channels import Channel, ShutdownSignal
from .dispatcher import DiagnosticHook, Dispatcher, Receiver
from .registry import BackendRegistry

__all__ = ["BackendRegistry", "Channel", "DiagnosticHook", "Dispatcher", "Receiver", "ShutdownSignal"]

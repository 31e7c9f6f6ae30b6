"""Adapter factory registry mapping backend kinds to constructors.

Registrations happen once per kind during process initialisation; afterwards
the registry is only read, so no locking is needed on the lookup path.
"""

from __future__ import annotations

from lib_log_hub.application.ports.backend import BackendFactory
from lib_log_hub.domain.errors import RegistrationError, UnknownKindError


class BackendRegistry:
    """Write-once mapping from backend kind to :data:`BackendFactory`.

    Examples
    --------
    >>> registry = BackendRegistry()
    >>> registry.register("null", object)
    >>> registry.resolve("null") is object
    True
    >>> "null" in registry, registry.kinds()
    (True, ('null',))
    """

    def __init__(self) -> None:
        self._factories: dict[str, BackendFactory] = {}

    def register(self, kind: str, factory: BackendFactory) -> None:
        """Register ``factory`` for ``kind``.

        Raises :class:`RegistrationError` for a ``None`` factory or a kind that
        is already registered; both are wiring mistakes, not runtime failures.
        """
        if factory is None:
            raise RegistrationError("lib_log_hub: register factory is None")
        if kind in self._factories:
            raise RegistrationError(f"lib_log_hub: register duplicated kind {kind!r}")
        self._factories[kind] = factory

    def resolve(self, kind: str) -> BackendFactory:
        """Return the factory for ``kind`` or raise :class:`UnknownKindError`."""
        try:
            return self._factories[kind]
        except KeyError:
            raise UnknownKindError(kind) from None

    def kinds(self) -> tuple[str, ...]:
        return tuple(self._factories)

    def __contains__(self, kind: object) -> bool:
        return kind in self._factories


__all__ = ["BackendRegistry"]

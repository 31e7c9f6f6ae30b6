"""Backend activation, hot-swap, fan-out, and shutdown orchestration.

Purpose
-------
Own the ordered set of active receivers (one per backend kind), the shared
error channel, and the single loop reporting asynchronous write failures.

Contents
--------
* :class:`Receiver` - handle binding one live backend to its channels and
  consume-loop thread.
* :class:`Dispatcher` - process-wide context object exposing ``activate``,
  ``dispatch`` and ``shutdown``.

System Role
-----------
Sits between the runtime facade and the backend adapters. ``activate`` and
``shutdown`` serialise on a single writer lock; ``dispatch`` works on a
snapshot and never takes that lock, so emitting never waits for a hot-swap to
finish holding it.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from lib_log_hub.application.channels import Channel, ShutdownSignal
from lib_log_hub.application.ports.backend import BackendPort
from lib_log_hub.application.registry import BackendRegistry
from lib_log_hub.domain.errors import ActivationError, BackendWriteError, ChannelClosedError, DispatcherStateError
from lib_log_hub.domain.levels import Severity
from lib_log_hub.domain.message import Message


LOGGER = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


class Receiver:
    """Dispatcher handle for one active backend.

    The handle outlives hot-swaps: :meth:`rewire` replaces the backend and its
    channels in place so producers holding an older snapshot keep a valid
    reference.
    """

    def __init__(
        self,
        kind: str,
        backend: BackendPort,
        inbound: Channel[Message],
        shutdown: ShutdownSignal,
    ) -> None:
        self.kind = kind
        self.backend = backend
        self.inbound = inbound
        self.shutdown = shutdown
        self.retired = False
        self.failed = False
        self._thread: threading.Thread | None = None
        self._rewired = threading.Condition()

    def level(self) -> Severity:
        return self.backend.level()

    def launch(self) -> None:
        """Run the current backend's consume loop on a dedicated daemon thread."""
        backend = self.backend
        inbound = self.inbound
        shutdown = self.shutdown
        kind = self.kind

        def run() -> None:
            try:
                backend.start()
            except Exception as exc:  # noqa: BLE001
                LOGGER.error("Consume loop of backend %r raised an exception; stopping it", kind, exc_info=exc)
                self._mark_failed(inbound)
            finally:
                shutdown.acknowledge()

        thread = threading.Thread(target=run, name=f"lib_log_hub-{kind}", daemon=True)
        self._thread = thread
        thread.start()

    def deliver(self, message: Message, timeout: float | None = None) -> bool:
        """Queue ``message`` on the inbound channel, blocking while it is full.

        A channel sealed by a hot-swap makes the call wait for :meth:`rewire`
        and retry on the replacement channel, provided the replacement backend
        still admits ``message.severity``. Returns ``False`` when the receiver
        was retired, its consume loop died, the new backend filters the message
        out, or ``timeout`` elapsed.
        """
        while True:
            inbound = self.inbound
            try:
                return inbound.put(message, timeout)
            except ChannelClosedError:
                with self._rewired:
                    self._rewired.wait_for(
                        lambda: self.inbound is not inbound or self.retired or self.failed, timeout
                    )
                    if self.inbound is inbound or self.retired:
                        return False
                    if message.severity < self.backend.level():
                        return False

    def close(self, timeout: float | None) -> None:
        """Stop intake, wait for the loop, drain, then release the backend.

        When the loop does not acknowledge within ``timeout`` it is usually
        stuck inside a write. The queue is drained anyway, so that write may
        overlap ``flush``; ``destroy`` waits for the loop once more and runs
        regardless after a second ``timeout``.
        """
        thread = self._thread
        if self.shutdown.send(timeout):
            if thread is not None:
                thread.join(timeout)
            self.backend.flush()
        else:
            LOGGER.warning("Backend %r did not acknowledge shutdown within %ss; draining anyway", self.kind, timeout)
            self.backend.flush()
            if thread is not None:
                thread.join(timeout)
                if thread.is_alive():
                    LOGGER.warning("Consume loop of backend %r is still running; releasing it anyway", self.kind)
        self.backend.destroy()

    def rewire(self, backend: BackendPort, inbound: Channel[Message], shutdown: ShutdownSignal) -> None:
        """Install a replacement backend and wake producers waiting on the old channel."""
        with self._rewired:
            self.backend = backend
            self.inbound = inbound
            self.shutdown = shutdown
            self.failed = False
            self._thread = None
            self._rewired.notify_all()

    def _mark_failed(self, inbound: Channel[Message]) -> None:
        """Stop intake of a channel whose consume loop died and release blocked producers."""
        inbound.seal()
        with self._rewired:
            if self.inbound is inbound:
                self.failed = True
            self._rewired.notify_all()

    def retire(self) -> None:
        with self._rewired:
            self.retired = True
            self._rewired.notify_all()


class Dispatcher:
    """Process-wide set of active receivers plus the shared error loop.

    Construction and :meth:`start` are separate phases: build the dispatcher,
    register kinds on its registry, then start it before the first
    :meth:`activate`.

    Examples
    --------
    >>> dispatcher = Dispatcher(BackendRegistry())
    >>> dispatcher.start()
    >>> dispatcher.active_kinds()
    ()
    >>> dispatcher.dispatch(Message(Severity.INFO, "nobody listens"))
    0
    >>> dispatcher.shutdown()
    """

    def __init__(
        self,
        registry: BackendRegistry,
        *,
        error_buffer_size: int = 5,
        shutdown_timeout: float | None = 5.0,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        self._registry = registry
        self._receivers: list[Receiver] = []
        self._lock = threading.RLock()
        self._errors: Channel[BackendWriteError] = Channel(error_buffer_size)
        self._error_signal = ShutdownSignal(self._errors)
        self._error_thread: threading.Thread | None = None
        self._shutdown_timeout = shutdown_timeout
        self._diagnostic = diagnostic
        self._started = False
        self._closed = False

    @property
    def registry(self) -> BackendRegistry:
        return self._registry

    @property
    def errors(self) -> Channel[BackendWriteError]:
        """Shared error channel handed to every backend."""

        return self._errors

    @property
    def dropped_errors(self) -> int:
        """Number of write errors discarded because the error channel was full."""

        return self._errors.rejected

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Start the error-reporting loop; calling it twice is a no-op."""
        with self._lock:
            if self._closed:
                raise DispatcherStateError("dispatcher has been shut down")
            if self._started:
                return
            thread = threading.Thread(target=self._run_error_loop, name="lib_log_hub-errors", daemon=True)
            self._error_thread = thread
            self._started = True
            thread.start()

    def activate(self, kind: str, config: Any) -> None:
        """Create, wire, and start a backend of ``kind``, replacing any previous one.

        The replacement is initialised before the old backend is touched, so a
        failed activation leaves the current backend of ``kind`` running.

        Raises
        ------
        UnknownKindError
            ``kind`` has no registered factory.
        ActivationError
            The backend rejected ``config``; the original error is chained.
        DispatcherStateError
            :meth:`start` was not called or :meth:`shutdown` already ran.
        """
        self._ensure_running()
        factory = self._registry.resolve(kind)
        backend = factory()
        try:
            backend.init(config)
        except Exception as exc:
            raise ActivationError(kind, exc) from exc
        inbound, shutdown = backend.exchange_channels(self._errors, kind=kind)

        with self._lock:
            if self._closed:
                backend.destroy()
                raise DispatcherStateError("dispatcher has been shut down")
            receiver = self._find(kind)
            if receiver is None:
                receiver = Receiver(kind, backend, inbound, shutdown)
                self._receivers.append(receiver)
            else:
                try:
                    receiver.close(self._shutdown_timeout)
                finally:
                    receiver.rewire(backend, inbound, shutdown)
            receiver.launch()
        LOGGER.debug("Activated backend %r at level %s", kind, backend.level().label)

    def dispatch(self, message: Message, timeout: float | None = None) -> int:
        """Fan ``message`` out to every receiver whose level admits it.

        Blocks while a receiver's inbound channel is full. Returns the number of
        receivers that accepted the message.
        """
        delivered = 0
        for receiver in self.receivers():
            if message.severity < receiver.level():
                continue
            if receiver.deliver(message, timeout):
                delivered += 1
        return delivered

    def report_error(self, error: BackendWriteError) -> bool:
        """Offer ``error`` to the error loop without blocking; ``False`` means it was dropped."""
        return self._errors.offer(error)

    def receivers(self) -> tuple[Receiver, ...]:
        """Return a snapshot of the active receivers in activation order."""

        return tuple(self._receivers)

    def active_kinds(self) -> tuple[str, ...]:
        return tuple(receiver.kind for receiver in self.receivers())

    def levels(self) -> dict[str, Severity]:
        """Return the minimum severity of each active backend keyed by kind."""

        return {receiver.kind: receiver.level() for receiver in self.receivers()}

    def shutdown(self) -> None:
        """Drain and release every backend, then stop the error loop.

        Messages already queued are rendered before their backend is destroyed;
        producers still holding a snapshot see their delivery rejected.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            receivers = list(self._receivers)
            self._receivers.clear()
            for receiver in receivers:
                try:
                    receiver.close(self._shutdown_timeout)
                except Exception as exc:  # noqa: BLE001
                    LOGGER.error("Closing backend %r raised an exception; continuing", receiver.kind, exc_info=exc)
                finally:
                    receiver.retire()
            self._stop_error_loop()

    def __enter__(self) -> "Dispatcher":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _ensure_running(self) -> None:
        if self._closed:
            raise DispatcherStateError("dispatcher has been shut down")
        if not self._started:
            raise DispatcherStateError("Dispatcher.start() must be called before activate()")

    def _find(self, kind: str) -> Receiver | None:
        for receiver in self._receivers:
            if receiver.kind == kind:
                return receiver
        return None

    def _run_error_loop(self) -> None:
        """Report write errors until the process-wide shutdown signal arrives."""
        try:
            while True:
                error = self._errors.receive()
                if error is None:
                    return
                self._report(error)
        finally:
            self._error_signal.acknowledge()

    def _stop_error_loop(self) -> None:
        thread = self._error_thread
        if thread is not None:
            if not self._error_signal.send(self._shutdown_timeout):
                LOGGER.warning("Error loop did not stop within %ss", self._shutdown_timeout)
            thread.join(self._shutdown_timeout)
            self._error_thread = None
        else:
            self._errors.seal()
        while (error := self._errors.poll()) is not None:
            self._report(error)
        self._errors.close()
        self._error_signal.close()

    def _report(self, error: BackendWriteError) -> None:
        cause = getattr(error, "cause", None)
        LOGGER.error("lib_log_hub: %s", error, exc_info=cause if isinstance(cause, BaseException) else None)
        self._emit_diagnostic(
            "backend_write_error",
            {"kind": getattr(error, "kind", None), "exception": repr(cause if cause is not None else error)},
        )

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["DiagnosticHook", "Dispatcher", "Receiver"]

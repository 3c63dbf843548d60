"""A single shared watch stream and its attached handlers."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from kubeinformer.informers.handler import ResourceEventHandler
from kubeinformer.observability.logging import get_logger
from kubeinformer.observability.metrics import informers_running, listener_errors_total

_logger = get_logger("informer.shared")


class EventType(StrEnum):
    """Watch event types, as sent by the API server."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"


@dataclass(frozen=True)
class InformerKey:
    """Identity of a shared informer.

    ``namespace`` is None for an informer watching all namespaces.
    """

    kind: str
    api_group: str
    resource_plural: str
    namespace: str | None
    label_selector: str | None
    resync_period: float

    def __str__(self) -> str:
        group = self.api_group or "core"
        scope = self.namespace if self.namespace is not None else "*"
        selector = f"?{self.label_selector}" if self.label_selector else ""
        return f"{self.resource_plural}.{group}/{scope}{selector}"


class SharedInformer:
    """One live watch stream shared by every handler that resolves to its key.

    Attaching handlers and dispatching events are safe from multiple threads.
    The list/watch transport feeds events in through :meth:`dispatch`.
    """

    def __init__(self, key: InformerKey, api_type: Any = None, api_list_type: Any = None) -> None:
        self.key = key
        self.api_type = api_type
        self.api_list_type = api_list_type
        self._handlers: list[ResourceEventHandler] = []
        self._lock = threading.Lock()
        self._running = False

    @property
    def handlers(self) -> tuple[ResourceEventHandler, ...]:
        with self._lock:
            return tuple(self._handlers)

    @property
    def is_running(self) -> bool:
        return self._running

    def add_event_handler(self, handler: ResourceEventHandler) -> None:
        """Attach *handler*; it receives every event dispatched from now on."""
        with self._lock:
            self._handlers.append(handler)
            count = len(self._handlers)
        _logger.debug(
            "event_handler_added",
            informer=str(self.key),
            handler=type(handler).__name__,
            handlers=count,
        )

    def start(self) -> None:
        """Mark the informer as running.  Starting twice is a no-op."""
        with self._lock:
            if self._running:
                return
            self._running = True
        informers_running.inc()
        _logger.info("informer_started", informer=str(self.key))

    def stop(self) -> None:
        """Mark the informer as stopped.  Stopping twice is a no-op."""
        with self._lock:
            if not self._running:
                return
            self._running = False
        informers_running.dec()
        _logger.info("informer_stopped", informer=str(self.key))

    def dispatch(self, event_type: EventType | str, obj: Any, old: Any = None) -> int:
        """Fan *obj* out to every attached handler.

        Returns the number of handlers that accepted the event without
        raising.  ``old`` is the previous state for MODIFIED events.
        """
        event_type = EventType(event_type)
        delivered = 0
        for handler in self.handlers:
            try:
                if event_type is EventType.ADDED:
                    handler.on_add(obj)
                elif event_type is EventType.MODIFIED:
                    handler.on_update(old, obj)
                else:
                    handler.on_delete(obj, False)
            except Exception as exc:  # noqa: BLE001
                listener_errors_total.labels(kind=self.key.kind).inc()
                _logger.error(
                    "event_handler_error",
                    informer=str(self.key),
                    handler=type(handler).__name__,
                    event_type=event_type.value,
                    error=str(exc),
                )
                continue
            delivered += 1
        return delivered

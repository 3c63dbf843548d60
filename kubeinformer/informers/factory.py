"""Get-or-create registry of shared informers.

Two requests that resolve to the same :class:`InformerKey` always receive
the same :class:`SharedInformer`, including when the requests race on
different threads.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Any

from kubeinformer.declaration import ALL_NAMESPACES
from kubeinformer.discovery import kind_of
from kubeinformer.informers.shared import InformerKey, SharedInformer
from kubeinformer.observability.logging import get_logger
from kubeinformer.observability.metrics import informers_created_total

_logger = get_logger("informer.factory")


class SharedInformerFactory:
    """Owns every shared informer; at most one per key."""

    def __init__(self) -> None:
        self._informers: dict[InformerKey, SharedInformer] = {}
        self._lock = threading.Lock()

    def shared_informers_for(
        self,
        api_type: Any,
        api_list_type: Any,
        resource_plural: str,
        api_group: str,
        namespaces: Iterable[str],
        label_selector: str | None,
        resync_period: float,
        start: bool = False,
    ) -> list[SharedInformer]:
        """Return one informer per namespace, or a single all-namespaces one.

        Literal namespaces are handled in sorted order so that the result
        is deterministic for a given namespace set.
        """
        namespaces = set(namespaces)
        targets: list[str | None]
        if ALL_NAMESPACES in namespaces:
            targets = [None]
        else:
            targets = sorted(namespaces)

        return [
            self.shared_informer_for(
                api_type,
                api_list_type,
                resource_plural,
                api_group,
                namespace,
                label_selector,
                resync_period,
                start=start,
            )
            for namespace in targets
        ]

    def shared_informer_for(
        self,
        api_type: Any,
        api_list_type: Any,
        resource_plural: str,
        api_group: str,
        namespace: str | None,
        label_selector: str | None,
        resync_period: float,
        start: bool = False,
    ) -> SharedInformer:
        """Return the informer for one namespace (None = all), creating it if needed."""
        key = InformerKey(
            kind=kind_of(api_type),
            api_group=api_group,
            resource_plural=resource_plural,
            namespace=namespace,
            label_selector=label_selector,
            resync_period=resync_period,
        )
        with self._lock:
            informer = self._informers.get(key)
            created = informer is None
            if informer is None:
                informer = SharedInformer(key, api_type=api_type, api_list_type=api_list_type)
                self._informers[key] = informer

        if created:
            informers_created_total.labels(kind=key.kind).inc()
            _logger.info("informer_created", informer=str(key))
        if start:
            informer.start()
        return informer

    def informers(self) -> list[SharedInformer]:
        with self._lock:
            return list(self._informers.values())

    def stop_all(self) -> None:
        """Stop every informer.  The informers stay registered."""
        for informer in self.informers():
            informer.stop()

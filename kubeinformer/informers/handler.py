"""Listener interface for informer events."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ResourceEventHandler(ABC):
    """Receives add/update/delete notifications from a shared informer.

    Handlers should not raise; if one does, the informer logs the error and
    keeps notifying the remaining handlers.
    """

    @abstractmethod
    def on_add(self, obj: Any) -> None:
        """Called when an object appears in the watched set."""

    @abstractmethod
    def on_update(self, old: Any, new: Any) -> None:
        """Called when a watched object changes."""

    @abstractmethod
    def on_delete(self, obj: Any, final_state_unknown: bool) -> None:
        """Called when an object leaves the watched set.

        ``final_state_unknown`` is True when the deletion was inferred (for
        example after a relist) and *obj* may be stale.
        """

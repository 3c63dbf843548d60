"""Registry that turns supplier references into callables.

Declarations refer to namespace and label-selector suppliers by reference
rather than by instance.  A reference is one of:

* a class -- instantiated once with no arguments and cached; instances
  must be callable,
* a name registered with :meth:`SupplierRegistry.register`,
* any other callable, used as is.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from kubeinformer.declaration import SupplierRef
from kubeinformer.errors import InformerError


class SupplierNotFoundError(InformerError):
    """Raised when a supplier name was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No supplier registered under the name '{name}'")
        self.name = name


class SupplierRegistry:
    """Resolves supplier references to callable instances.

    Safe to use from multiple threads: class instantiation happens at most
    once per class.  A supplier constructor may itself look up other
    suppliers in the same registry.
    """

    def __init__(self) -> None:
        self._named: dict[str, Callable[[], Any]] = {}
        self._instances: dict[type, Callable[[], Any]] = {}
        self._lock = threading.RLock()

    def register(self, ref: str | type, supplier: Callable[[], Any]) -> None:
        """Register *supplier* under a name or in place of a class."""
        with self._lock:
            if isinstance(ref, str):
                self._named[ref] = supplier
            else:
                self._instances[ref] = supplier

    def get(self, ref: SupplierRef) -> Callable[[], Any]:
        """Return the callable that *ref* refers to."""
        if isinstance(ref, str):
            try:
                return self._named[ref]
            except KeyError:
                raise SupplierNotFoundError(ref) from None
        if isinstance(ref, type):
            with self._lock:
                instance = self._instances.get(ref)
                if instance is None:
                    instance = ref()
                    if not callable(instance):
                        raise TypeError(f"Supplier {ref.__name__} instances must be callable")
                    self._instances[ref] = instance
            return instance
        return ref

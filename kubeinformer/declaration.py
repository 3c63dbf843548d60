"""The ``@informer`` class decorator and the declaration it attaches.

A handler class declares what it wants to watch::

    @informer(V1ConfigMap, namespaces=["kube-system"], label_selector="app=web")
    class ConfigMapHandler(ResourceEventHandler):
        ...

The declaration is read once per handler type and never mutated.  Fields
that are left at ``Marker.AUTO`` are filled in when the handler is bound.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeVar

_DECLARATION_ATTR = "__informer_declaration__"

T = TypeVar("T", bound=type)

# A supplier reference is resolved through the SupplierRegistry: a class
# (instantiated once), a registered name, or a ready-made callable.
SupplierRef = Callable[[], Any] | type | str


class Marker(StrEnum):
    """Sentinel values recognised in a handler declaration."""

    AUTO = "<auto>"
    ALL_NAMESPACES = "<all-namespaces>"


AUTO = Marker.AUTO
ALL_NAMESPACES = Marker.ALL_NAMESPACES


@dataclass(frozen=True)
class HandlerDeclaration:
    """What a handler type watches, as declared by ``@informer``."""

    api_type: Any
    api_list_type: Any = None
    resource_plural: str = AUTO
    api_group: str = AUTO
    namespaces: tuple[str, ...] = ()
    namespaces_supplier: SupplierRef | None = None
    namespace: str = AUTO
    label_selector: str = ""
    label_selector_supplier: SupplierRef | None = None
    resync_period: float | None = None


def informer(
    api_type: Any,
    *,
    api_list_type: Any = None,
    resource_plural: str = AUTO,
    api_group: str = AUTO,
    namespaces: Iterable[str] = (),
    namespaces_supplier: SupplierRef | None = None,
    namespace: str = AUTO,
    label_selector: str = "",
    label_selector_supplier: SupplierRef | None = None,
    resync_period: float | None = None,
) -> Callable[[T], T]:
    """Attach a :class:`HandlerDeclaration` to the decorated handler class."""
    declaration = HandlerDeclaration(
        api_type=api_type,
        api_list_type=api_list_type,
        resource_plural=resource_plural,
        api_group=api_group,
        namespaces=tuple(namespaces),
        namespaces_supplier=namespaces_supplier,
        namespace=namespace,
        label_selector=label_selector,
        label_selector_supplier=label_selector_supplier,
        resync_period=resync_period,
    )

    def decorator(cls: T) -> T:
        setattr(cls, _DECLARATION_ATTR, declaration)
        return cls

    return decorator


def declaration_of(handler_type: type) -> HandlerDeclaration | None:
    """Return the declaration attached to *handler_type*, or None."""
    return getattr(handler_type, _DECLARATION_ATTR, None)

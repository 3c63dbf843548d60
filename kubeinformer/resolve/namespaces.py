"""Namespace-set resolution for a handler declaration.

Sources are merged in a fixed order:

1. static ``namespaces`` literals,
2. the output of ``namespaces_supplier``, if any,
3. the single ``namespace`` field unless it is ``AUTO``,
4. the ambient namespace, only when ``namespace`` is ``AUTO`` and nothing
   else produced a namespace,
5. ``ALL_NAMESPACES`` from any source collapses the set to just that marker.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from kubeinformer.declaration import ALL_NAMESPACES, AUTO, HandlerDeclaration
from kubeinformer.observability.logging import get_logger
from kubeinformer.suppliers import SupplierRegistry

_logger = get_logger("resolve.namespaces")

ALL = frozenset({ALL_NAMESPACES})


def _supplied(value: str | Iterable[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def resolve_namespaces(
    declaration: HandlerDeclaration,
    ambient_namespace: Callable[[], str],
    suppliers: SupplierRegistry,
) -> frozenset[str]:
    """Return the normalized, non-empty namespace set for *declaration*.

    *ambient_namespace* is only called when the ambient default is needed.
    """
    namespaces: set[str] = set(declaration.namespaces)

    if declaration.namespaces_supplier is not None:
        supplier = suppliers.get(declaration.namespaces_supplier)
        namespaces.update(_supplied(supplier()))

    if declaration.namespace != AUTO:
        namespaces.add(declaration.namespace)
    elif not namespaces:
        namespaces.add(ambient_namespace())

    if ALL_NAMESPACES in namespaces:
        if len(namespaces) > 1:
            _logger.debug(
                "all_namespaces_collapse",
                api_type=str(declaration.api_type),
                discarded=sorted(ns for ns in namespaces if ns != ALL_NAMESPACES),
            )
        return ALL

    return frozenset(namespaces)

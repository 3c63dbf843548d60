"""Label-selector composition."""

from __future__ import annotations

from kubeinformer.declaration import HandlerDeclaration
from kubeinformer.suppliers import SupplierRegistry


def compose_selector(declaration: HandlerDeclaration, suppliers: SupplierRegistry) -> str | None:
    """Join the static selector and the supplied fragment with a comma.

    Empty fragments count as absent; None means "no filtering".
    """
    fragments: list[str] = []
    if declaration.label_selector:
        fragments.append(declaration.label_selector)

    if declaration.label_selector_supplier is not None:
        supplied = suppliers.get(declaration.label_selector_supplier)()
        if supplied:
            fragments.append(supplied)

    return ",".join(fragments) if fragments else None

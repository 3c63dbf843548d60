"""Binds handler instances to the shared informers their type declares.

``WatchBinder.bind`` is the construction-time hook: it resolves the
handler type's ``@informer`` declaration into a :class:`ResolvedWatchSpec`,
obtains the matching shared informers and attaches the handler to each.
``HandlerFactory.create`` resolves the declaration first and only then
constructs the handler and attaches it.

Binding holds no shared mutable state of its own; concurrent binds are
safe as long as the informer factory is, and it is.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from kubeinformer.declaration import ALL_NAMESPACES, HandlerDeclaration, declaration_of
from kubeinformer.errors import InformerError
from kubeinformer.informers.factory import SharedInformerFactory
from kubeinformer.informers.handler import ResourceEventHandler
from kubeinformer.models.spec import ResolvedWatchSpec
from kubeinformer.observability.logging import get_logger
from kubeinformer.observability.metrics import handlers_bound_total
from kubeinformer.resolve.ambient import DefaultNamespaceResolver
from kubeinformer.resolve.identity import Discovery, resolve_identity
from kubeinformer.resolve.namespaces import resolve_namespaces
from kubeinformer.resolve.selector import compose_selector
from kubeinformer.suppliers import SupplierRegistry

_logger = get_logger("binder")

H = TypeVar("H", bound=ResourceEventHandler)


class WatchBinder:
    """Resolves declarations and attaches handlers to shared informers.

    Args:
        informer_factory:   Registry that deduplicates informers by key.
        ambient_namespace:  Called when a declaration falls back to the
                            namespace the process runs in.
        suppliers:          Resolves namespace and label-selector suppliers.
        discovery:          Discovery cache; None disables automatic
                            ``resource_plural``/``api_group`` resolution.
        default_resync_period: Used when a declaration leaves
                            ``resync_period`` unset.
    """

    def __init__(
        self,
        informer_factory: SharedInformerFactory,
        ambient_namespace: Callable[[], str] | None = None,
        suppliers: SupplierRegistry | None = None,
        discovery: Discovery | None = None,
        default_resync_period: float = 0.0,
    ) -> None:
        self._informer_factory = informer_factory
        self._ambient_namespace = ambient_namespace or DefaultNamespaceResolver().resolve_namespace
        self._suppliers = suppliers or SupplierRegistry()
        self._discovery = discovery
        self._default_resync_period = default_resync_period

    def resolve(self, declaration: HandlerDeclaration) -> ResolvedWatchSpec:
        """Resolve *declaration* into a watch specification.

        Raises DiscoveryDisabledError or ResourceResolutionError when the
        resource identity cannot be resolved.
        """
        namespaces = resolve_namespaces(declaration, self._ambient_namespace, self._suppliers)
        label_selector = compose_selector(declaration, self._suppliers)

        try:
            identity = resolve_identity(
                declaration.api_type,
                declaration.resource_plural,
                declaration.api_group,
                self._discovery,
            )
        except InformerError:
            handlers_bound_total.labels(outcome="failed").inc()
            raise
        if identity.scope_override is not None:
            if ALL_NAMESPACES not in namespaces:
                _logger.warning(
                    "namespaces_ignored_for_cluster_scoped_resource",
                    api_type=str(declaration.api_type),
                    namespaces=sorted(namespaces),
                )
            namespaces = identity.scope_override

        resync_period = declaration.resync_period
        if resync_period is None:
            resync_period = self._default_resync_period

        return ResolvedWatchSpec(
            api_type=declaration.api_type,
            api_list_type=declaration.api_list_type,
            resource_plural=identity.resource_plural,
            api_group=identity.api_group,
            namespaces=namespaces,
            label_selector=label_selector,
            resync_period=resync_period,
        )

    def bind(self, declaration: HandlerDeclaration | None, handler: H) -> H:
        """Attach *handler* to the informers *declaration* resolves to.

        Without a declaration the handler is returned untouched.  Identity
        resolution errors propagate and no informer is touched.
        """
        if declaration is None:
            handlers_bound_total.labels(outcome="undeclared").inc()
            _logger.error(
                "informer_declaration_missing",
                handler=type(handler).__qualname__,
                detail="handler is not decorated with @informer; no informer was created",
            )
            return handler

        return self.attach(self.resolve(declaration), handler)

    def attach(self, spec: ResolvedWatchSpec, handler: H) -> H:
        """Attach *handler* to the shared informers for an already resolved *spec*."""
        informers = self._informer_factory.shared_informers_for(
            spec.api_type,
            spec.api_list_type,
            spec.resource_plural,
            spec.api_group,
            spec.namespaces,
            spec.label_selector,
            spec.resync_period,
            start=True,
        )
        for informer in informers:
            informer.add_event_handler(handler)

        handlers_bound_total.labels(outcome="bound").inc()
        _logger.info(
            "handler_bound",
            handler=type(handler).__qualname__,
            resource=f"{spec.resource_plural}.{spec.api_group or 'core'}",
            namespaces=sorted(spec.namespaces),
            label_selector=spec.label_selector,
            informers=len(informers),
        )
        return handler


class HandlerFactory:
    """Constructs handlers and binds them using their type's declaration."""

    def __init__(self, binder: WatchBinder) -> None:
        self._binder = binder

    def create(self, handler_cls: type[H], *args: Any, **kwargs: Any) -> H:
        """Instantiate *handler_cls* and bind the instance.

        The declaration is resolved before the constructor runs, so a
        resolution error propagates without an instance ever being built.
        """
        declaration = declaration_of(handler_cls)
        if declaration is None:
            return self._binder.bind(None, handler_cls(*args, **kwargs))
        spec = self._binder.resolve(declaration)
        return self._binder.attach(spec, handler_cls(*args, **kwargs))

"""kubeinformer: bind declared event handlers to shared Kubernetes informers."""

from kubeinformer.binder import HandlerFactory, WatchBinder
from kubeinformer.declaration import (
    ALL_NAMESPACES,
    AUTO,
    HandlerDeclaration,
    Marker,
    declaration_of,
    informer,
)
from kubeinformer.discovery import DiscoveryCache
from kubeinformer.errors import DiscoveryDisabledError, InformerError, ResourceResolutionError
from kubeinformer.informers import ResourceEventHandler, SharedInformer, SharedInformerFactory
from kubeinformer.models.spec import APIResource, ResolvedWatchSpec
from kubeinformer.suppliers import SupplierRegistry

__version__ = "0.1.0"

__all__ = [
    "ALL_NAMESPACES",
    "AUTO",
    "APIResource",
    "DiscoveryCache",
    "DiscoveryDisabledError",
    "HandlerDeclaration",
    "HandlerFactory",
    "InformerError",
    "Marker",
    "ResolvedWatchSpec",
    "ResourceEventHandler",
    "ResourceResolutionError",
    "SharedInformer",
    "SharedInformerFactory",
    "SupplierRegistry",
    "WatchBinder",
    "__version__",
    "declaration_of",
    "informer",
]

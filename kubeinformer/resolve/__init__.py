"""Resolution of a handler declaration into a watch specification.

Submodules
----------
namespaces -- resolve_namespaces: merge of static, supplied, fallback and ambient namespaces.
selector   -- compose_selector: static and supplied label-selector fragments.
identity   -- resolve_identity: resource plural and API group via discovery.
ambient    -- DefaultNamespaceResolver: the namespace the process runs in.

The three resolvers are independent of each other; WatchBinder combines them.
"""

from kubeinformer.resolve.ambient import DefaultNamespaceResolver
from kubeinformer.resolve.identity import Discovery, resolve_identity
from kubeinformer.resolve.namespaces import resolve_namespaces
from kubeinformer.resolve.selector import compose_selector

__all__ = [
    "DefaultNamespaceResolver",
    "Discovery",
    "compose_selector",
    "resolve_identity",
    "resolve_namespaces",
]

"""Shared informers and the factory that deduplicates them.

Submodules
----------
handler -- ResourceEventHandler: the listener interface handlers implement.
shared  -- SharedInformer: one watch stream with any number of handlers.
factory -- SharedInformerFactory: get-or-create registry keyed by InformerKey.
"""

from kubeinformer.informers.factory import SharedInformerFactory
from kubeinformer.informers.handler import ResourceEventHandler
from kubeinformer.informers.shared import EventType, InformerKey, SharedInformer

__all__ = [
    "EventType",
    "InformerKey",
    "ResourceEventHandler",
    "SharedInformer",
    "SharedInformerFactory",
]

"""Core data structures for kubeinformer."""

from kubeinformer.models.config import KubeInformerConfig
from kubeinformer.models.spec import APIResource, IdentityResolution, ResolvedWatchSpec

__all__ = [
    "APIResource",
    "IdentityResolution",
    "KubeInformerConfig",
    "ResolvedWatchSpec",
]

"""Shared fixtures for kubeinformer integration tests.

Wires a real SharedInformerFactory, DiscoveryCache and WatchBinder
together so tests can exercise full bind flows without a cluster.
"""

from __future__ import annotations

import pytest

from kubeinformer.binder import HandlerFactory, WatchBinder
from kubeinformer.discovery import DiscoveryCache
from kubeinformer.informers.factory import SharedInformerFactory
from kubeinformer.suppliers import SupplierRegistry
from tests.helpers import AMBIENT_NAMESPACE, CLUSTER_ROLES, CONFIGMAPS, DEPLOYMENTS, NODES


@pytest.fixture
def informer_factory() -> SharedInformerFactory:
    return SharedInformerFactory()


@pytest.fixture
def discovery() -> DiscoveryCache:
    return DiscoveryCache([CONFIGMAPS, NODES, DEPLOYMENTS, CLUSTER_ROLES])


@pytest.fixture
def suppliers() -> SupplierRegistry:
    return SupplierRegistry()


@pytest.fixture
def binder(
    informer_factory: SharedInformerFactory,
    discovery: DiscoveryCache,
    suppliers: SupplierRegistry,
) -> WatchBinder:
    return WatchBinder(
        informer_factory,
        ambient_namespace=lambda: AMBIENT_NAMESPACE,
        suppliers=suppliers,
        discovery=discovery,
        default_resync_period=15.0,
    )


@pytest.fixture
def handler_factory(binder: WatchBinder) -> HandlerFactory:
    return HandlerFactory(binder)

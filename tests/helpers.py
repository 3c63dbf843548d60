"""Test doubles and factories shared by unit and integration tests."""

from __future__ import annotations

from typing import Any

from kubeinformer.declaration import HandlerDeclaration
from kubeinformer.informers.handler import ResourceEventHandler
from kubeinformer.models.spec import APIResource


class RecordingHandler(ResourceEventHandler):
    """Handler that records every notification it receives."""

    def __init__(self) -> None:
        self.added: list[Any] = []
        self.updated: list[tuple[Any, Any]] = []
        self.deleted: list[tuple[Any, bool]] = []

    def on_add(self, obj: Any) -> None:
        self.added.append(obj)

    def on_update(self, old: Any, new: Any) -> None:
        self.updated.append((old, new))

    def on_delete(self, obj: Any, final_state_unknown: bool) -> None:
        self.deleted.append((obj, final_state_unknown))


def make_declaration(**kwargs: Any) -> HandlerDeclaration:
    """Create a HandlerDeclaration with explicit identity defaults."""
    defaults: dict[str, Any] = {
        "api_type": "ConfigMap",
        "api_list_type": "ConfigMapList",
        "resource_plural": "configmaps",
        "api_group": "",
    }
    defaults.update(kwargs)
    if "namespaces" in defaults:
        defaults["namespaces"] = tuple(defaults["namespaces"])
    return HandlerDeclaration(**defaults)


AMBIENT_NAMESPACE = "kubeinformer-system"

# Discovery entries matching what a stock cluster reports.
CONFIGMAPS = APIResource(group="", version="v1", kind="ConfigMap", resource_plural="configmaps", namespaced=True)
NODES = APIResource(group="", version="v1", kind="Node", resource_plural="nodes", namespaced=False)
DEPLOYMENTS = APIResource(group="apps", version="v1", kind="Deployment", resource_plural="deployments", namespaced=True)
CLUSTER_ROLES = APIResource(
    group="rbac.authorization.k8s.io",
    version="v1",
    kind="ClusterRole",
    resource_plural="clusterroles",
    namespaced=False,
)

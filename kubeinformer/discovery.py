"""Discovery cache: maps resource types to their API identity and scope.

The cache is populated from the cluster's discovery endpoints with
kubernetes-asyncio (``refresh``) or directly from known resources
(``load``).  Lookups are synchronous and read an immutable snapshot, so
they are safe from any thread while a refresh is in flight.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable
from typing import Any

from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]
from kubernetes_asyncio.client.exceptions import ApiException  # type: ignore[import-untyped]

from kubeinformer.models.spec import APIResource
from kubeinformer.observability.logging import get_logger

_logger = get_logger("discovery")

# kubernetes model classes are named V1Pod, V1beta1CronJob, V2HorizontalPodAutoscaler, ...
_RE_VERSION_PREFIX = re.compile(r"^V\d+(?:(?:alpha|beta)\d+)?(?=[A-Z])")

# Status code to model name, as the generated *Api classes pass it to call_api
_RESOURCE_LIST_TYPES = {200: "V1APIResourceList", 401: None}


def kind_of(api_type: Any) -> str:
    """Return the resource kind a type token refers to."""
    if isinstance(api_type, str):
        return api_type
    kind = getattr(api_type, "kind", None)
    if isinstance(kind, str) and kind:
        return kind
    name = getattr(api_type, "__name__", str(api_type))
    return _RE_VERSION_PREFIX.sub("", name)


def _from_resource_list(resource_list: Any, group: str, version: str) -> list[APIResource]:
    resources: list[APIResource] = []
    for item in resource_list.resources or []:
        # Subresources such as pods/log or deployments/scale
        if "/" in item.name:
            continue
        resources.append(
            APIResource(
                group=item.group or group,
                version=item.version or version,
                kind=item.kind,
                resource_plural=item.name,
                namespaced=item.namespaced,
            )
        )
    return resources


class DiscoveryCache:
    """Index of discovered API resources keyed by kind.

    When a kind is served by more than one group the first one loaded wins;
    ``refresh`` loads the core group first, then groups in the order the API
    server lists them, each at its preferred version.
    """

    def __init__(self, resources: Iterable[APIResource] = ()) -> None:
        self._lock = threading.Lock()
        self._by_kind: dict[str, APIResource] = {}
        self.load(resources)

    def load(self, resources: Iterable[APIResource]) -> None:
        """Replace the cached snapshot with *resources*."""
        by_kind: dict[str, APIResource] = {}
        for resource in resources:
            by_kind.setdefault(resource.kind, resource)
        with self._lock:
            self._by_kind = by_kind

    def find(self, api_type: Any) -> APIResource | None:
        """Return the API resource for *api_type*, or None if unknown."""
        with self._lock:
            by_kind = self._by_kind
        return by_kind.get(kind_of(api_type))

    def resources(self) -> list[APIResource]:
        with self._lock:
            return list(self._by_kind.values())

    async def refresh(self, api_client: Any) -> int:
        """Reload the cache from the cluster and return the number of kinds.

        *api_client* is a ``kubernetes_asyncio`` ``ApiClient`` owned by the
        caller, which is responsible for closing it.  Groups whose discovery
        endpoint fails (typically an unavailable aggregated API) are skipped
        with a warning.
        """
        core_list = await k8s_client.CoreV1Api(api_client).get_api_resources()
        resources = _from_resource_list(core_list, group="", version="v1")

        group_list = await k8s_client.ApisApi(api_client).get_api_versions()
        for group in group_list.groups or []:
            preferred = group.preferred_version or group.versions[0]
            try:
                resource_list = await api_client.call_api(
                    f"/apis/{preferred.group_version}",
                    "GET",
                    header_params={"Accept": "application/json"},
                    response_types_map=_RESOURCE_LIST_TYPES,
                    auth_settings=["BearerToken"],
                    _return_http_data_only=True,
                )
            except ApiException as exc:
                _logger.warning(
                    "discovery_group_failed",
                    group_version=preferred.group_version,
                    status=exc.status,
                    reason=exc.reason,
                )
                continue
            resources.extend(_from_resource_list(resource_list, group=group.name, version=preferred.version))

        self.load(resources)
        count = len(self.resources())
        _logger.info("discovery_refreshed", kinds=count)
        return count

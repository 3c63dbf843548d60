"""Resource identity resolution: ``resource_plural`` and ``api_group``.

Explicit values are used as given.  When either is ``AUTO`` the discovery
cache is consulted, and only the ``AUTO`` fields are filled from it.  If
discovery reports the kind as cluster-scoped the result carries a scope
override: namespace filtering does not apply to such resources.
"""

from __future__ import annotations

from typing import Any, Protocol

from kubeinformer.declaration import ALL_NAMESPACES, AUTO
from kubeinformer.errors import DiscoveryDisabledError, ResourceResolutionError
from kubeinformer.models.spec import APIResource, IdentityResolution
from kubeinformer.observability.logging import get_logger

_logger = get_logger("resolve.identity")


class Discovery(Protocol):
    """Read-only lookup of API resources by type token."""

    def find(self, api_type: Any) -> APIResource | None: ...


def resolve_identity(
    api_type: Any,
    resource_plural: str,
    api_group: str,
    discovery: Discovery | None,
) -> IdentityResolution:
    """Resolve the plural name and API group of *api_type*.

    Raises:
        DiscoveryDisabledError:  a field is ``AUTO`` and *discovery* is None.
        ResourceResolutionError: discovery has no entry for *api_type*.
    """
    unresolved = [
        name
        for name, value in (("resource_plural", resource_plural), ("api_group", api_group))
        if value == AUTO
    ]
    if not unresolved:
        return IdentityResolution(resource_plural=resource_plural, api_group=api_group)

    if discovery is None:
        raise DiscoveryDisabledError(api_type, unresolved)

    api_resource = discovery.find(api_type)
    if api_resource is None:
        raise ResourceResolutionError(api_type, unresolved)

    if api_group == AUTO:
        api_group = api_resource.group
    if resource_plural == AUTO:
        resource_plural = api_resource.resource_plural

    _logger.debug(
        "identity_resolved",
        api_type=str(api_type),
        resolved=unresolved,
        resource_plural=resource_plural,
        api_group=api_group,
        namespaced=api_resource.namespaced,
    )

    scope_override = None
    if api_resource.namespaced is False:
        scope_override = frozenset({ALL_NAMESPACES})

    return IdentityResolution(
        resource_plural=resource_plural,
        api_group=api_group,
        scope_override=scope_override,
    )

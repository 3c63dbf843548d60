"""Resolved watch specification and discovery data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class APIResource:
    """One resource kind as reported by API discovery.

    ``namespaced`` is None when discovery did not say; such resources are
    treated as namespaced.
    """

    group: str
    version: str
    kind: str
    resource_plural: str
    namespaced: bool | None = True

    @property
    def group_version(self) -> str:
        """Return ``group/version``, or just ``version`` for the core group."""
        return f"{self.group}/{self.version}" if self.group else self.version


@dataclass(frozen=True)
class IdentityResolution:
    """Outcome of resolving ``resource_plural`` and ``api_group``.

    ``scope_override`` is set when discovery reports the kind as
    cluster-scoped; it replaces whatever namespace set was resolved.
    """

    resource_plural: str
    api_group: str
    scope_override: frozenset[str] | None = None


@dataclass(frozen=True)
class ResolvedWatchSpec:
    """Fully resolved watch specification for one handler instantiation.

    Invariant: ``namespaces`` is never empty, and when it contains
    ``ALL_NAMESPACES`` it contains nothing else.
    """

    api_type: Any
    api_list_type: Any
    resource_plural: str
    api_group: str
    namespaces: frozenset[str]
    label_selector: str | None
    resync_period: float

"""Exceptions raised while resolving and binding informer handlers.

A handler class without an ``@informer`` declaration is not an error: the
binder logs it and hands the instance back untouched.
"""

from __future__ import annotations

from collections.abc import Sequence


class InformerError(Exception):
    """Base class for all kubeinformer errors."""


class _IdentityError(InformerError):
    """Raised when ``resource_plural`` and/or ``api_group`` cannot be resolved."""

    def __init__(self, api_type: object, fields: Sequence[str], message: str) -> None:
        super().__init__(message)
        self.api_type = api_type
        self.fields = tuple(fields)


class DiscoveryDisabledError(_IdentityError):
    """Automatic resolution was requested but the discovery cache is disabled."""

    def __init__(self, api_type: object, fields: Sequence[str]) -> None:
        names = " and ".join(f"`{f}`" for f in fields)
        super().__init__(
            api_type,
            fields,
            f"Cannot resolve {names} for {_type_name(api_type)}: the discovery cache is disabled, "
            "provide `resource_plural` and `api_group` to create the shared informer.",
        )


class ResourceResolutionError(_IdentityError):
    """The discovery cache was consulted but knows nothing about the type."""

    def __init__(self, api_type: object, fields: Sequence[str]) -> None:
        names = " and ".join(f"`{f}`" for f in fields)
        super().__init__(
            api_type,
            fields,
            f"Failed to resolve {names} for {_type_name(api_type)} from the discovery cache.",
        )


def _type_name(api_type: object) -> str:
    if isinstance(api_type, type):
        return api_type.__name__
    return str(api_type)

"""Introspection routes: health and the live informer list."""

from __future__ import annotations

from fastapi import APIRouter, Request

from kubeinformer.api.schemas import HealthResponse, InformerInfo, InformerListResponse
from kubeinformer.informers.factory import SharedInformerFactory

router = APIRouter()


def _factory(request: Request) -> SharedInformerFactory:
    return request.app.state.informer_factory  # type: ignore[no-any-return]


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    from kubeinformer import __version__

    informers = _factory(request).informers()
    return HealthResponse(
        status="ok",
        version=__version__,
        informers=len(informers),
        running=sum(1 for i in informers if i.is_running),
    )


@router.get("/informers", response_model=InformerListResponse)
async def list_informers(request: Request, kind: str | None = None) -> InformerListResponse:
    """List shared informers, optionally filtered by kind."""
    items = [
        InformerInfo(
            kind=informer.key.kind,
            api_group=informer.key.api_group,
            resource_plural=informer.key.resource_plural,
            namespace=informer.key.namespace,
            label_selector=informer.key.label_selector,
            resync_period=informer.key.resync_period,
            running=informer.is_running,
            handlers=len(informer.handlers),
        )
        for informer in _factory(request).informers()
        if kind is None or informer.key.kind == kind
    ]
    items.sort(key=lambda i: (i.kind, i.api_group, i.namespace or "", i.label_selector or ""))
    return InformerListResponse(informers=items)

"""FastAPI application factory for the kubeinformer introspection API.

Usage::

    from kubeinformer.api.app import create_app

    app = create_app(informer_factory=factory)

The factory is used by both the bootstrap (``kubeinformer.app``) and tests.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from kubeinformer.api.routes import router
from kubeinformer.api.schemas import ErrorResponse
from kubeinformer.informers.factory import SharedInformerFactory

_log = structlog.get_logger(component="api.app")

_API_PREFIX = "/api/v1"


def create_app(informer_factory: SharedInformerFactory, config: Any = None) -> FastAPI:
    """Create and configure the introspection FastAPI application.

    Args:
        informer_factory: The SharedInformerFactory whose informers are reported.
        config:           Optional KubeInformerConfig, kept on ``app.state``.
    """
    from kubeinformer import __version__

    app = FastAPI(
        title="kubeinformer",
        summary="Shared informer introspection API",
        version=__version__,
        docs_url="/api/v1/docs",
        redoc_url=None,
        openapi_url="/api/v1/openapi.json",
    )

    app.state.informer_factory = informer_factory
    app.state.config = config

    app.include_router(router, prefix=_API_PREFIX)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        _request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        error = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=error, detail=str(exc.detail)).model_dump(),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for unhandled exceptions; never expose stack traces."""
        _log.error(
            "unhandled_exception",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="INTERNAL_ERROR",
                detail="An unexpected error occurred.",
            ).model_dump(),
        )

    return app

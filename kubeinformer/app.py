"""Application bootstrap for kubeinformer.

Wires all components in dependency order and manages the asyncio lifecycle.
Startup order: config → logging → K8s client → discovery → informer factory
              → binder → handlers → REST

Shutdown stops components in reverse startup order.  Each component's stop
error is caught and logged independently so that a single failure does not
prevent the rest from shutting down cleanly.
"""

from __future__ import annotations

import asyncio
import importlib
import signal
from typing import TYPE_CHECKING, Any, TypeVar

from kubeinformer.binder import HandlerFactory, WatchBinder
from kubeinformer.config import load_config
from kubeinformer.discovery import DiscoveryCache
from kubeinformer.informers.factory import SharedInformerFactory
from kubeinformer.informers.handler import ResourceEventHandler
from kubeinformer.models.config import KubeInformerConfig
from kubeinformer.observability.logging import get_logger, setup_logging
from kubeinformer.resolve.ambient import DefaultNamespaceResolver
from kubeinformer.suppliers import SupplierRegistry

if TYPE_CHECKING:
    import structlog

H = TypeVar("H", bound=ResourceEventHandler)

_SHUTDOWN_GRACE_SECONDS = 15


class _ComponentError(Exception):
    """Raised when a mandatory component fails to start."""

    def __init__(self, component: str, cause: Exception) -> None:
        super().__init__(f"Component '{component}' failed to start: {cause}")
        self.component = component
        self.cause = cause


def _import_handler(path: str) -> type:
    """Import ``module:ClassName`` and return the class."""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Invalid handler path '{path}', expected 'module:ClassName'")
    module = importlib.import_module(module_name)
    return getattr(module, attr)  # type: ignore[no-any-return]


class InformerApp:
    """Application root.  Owns every component and coordinates their lifecycle.

    ``stop()`` is safe on an app that was never started or already stopped.
    """

    def __init__(
        self,
        config: KubeInformerConfig | None = None,
        suppliers: SupplierRegistry | None = None,
    ) -> None:
        self.config = config
        self.suppliers = suppliers or SupplierRegistry()

        self._api_client: Any = None
        self._discovery: DiscoveryCache | None = None
        self._informer_factory: SharedInformerFactory | None = None
        self._handler_factory: HandlerFactory | None = None
        self._rest_server: Any = None
        self._handlers: list[ResourceEventHandler] = []

        self._background_tasks: list[asyncio.Task[None]] = []

        self._running = False
        self._log: structlog.stdlib.BoundLogger | None = None

    @property
    def informer_factory(self) -> SharedInformerFactory | None:
        return self._informer_factory

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Start all components in dependency order.

        Raises _ComponentError if a mandatory component cannot start.
        """
        # --- 1. Configuration -------------------------------------------
        if self.config is None:
            self.config = load_config()

        # --- 2. Logging -------------------------------------------------
        setup_logging(self.config.log.level)
        self._log = get_logger("app")
        self._log.info("kubeinformer starting", version=_kubeinformer_version())

        # --- 3. Kubernetes client ----------------------------------------
        await self._start_k8s_client()

        # --- 4. Discovery cache (optional) -------------------------------
        await self._start_discovery()

        # --- 5. Informer factory and binder -------------------------------
        self._start_binder()

        # --- 6. Handlers from configuration -------------------------------
        self._start_handlers()

        # --- 7. REST API ------------------------------------------------
        await self._start_rest()

        self._running = True
        self._log.info("kubeinformer started", handlers=len(self._handlers))

    # ------------------------------------------------------------------
    # Component startup helpers
    # ------------------------------------------------------------------

    async def _start_k8s_client(self) -> None:
        """Initialise the kubernetes-asyncio client when discovery needs it."""
        assert self._log is not None
        assert self.config is not None
        if not self.config.discovery.enabled:
            self._log.info("k8s client not needed (discovery.enabled=false)")
            return

        self._log.debug("starting k8s client")
        try:
            import kubernetes_asyncio.config as k8s_config  # type: ignore[import-untyped]
            from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]

            try:
                k8s_config.load_incluster_config()
                self._log.info("k8s client configured from in-cluster service account")
            except k8s_config.ConfigException:
                await k8s_config.load_kube_config()
                self._log.info("k8s client configured from kubeconfig")

            self._api_client = k8s_client.ApiClient()
        except Exception as exc:
            # Without a client discovery cannot be refreshed; explicit
            # resource_plural/api_group declarations still work.
            self._log.warning("k8s client failed to start; discovery disabled", error=str(exc))
            self._api_client = None

    async def _start_discovery(self) -> None:
        """Build the discovery cache and load it from the cluster.

        Non-fatal: on failure the cache stays empty and declarations that
        rely on automatic resolution fail when their handlers are created.
        """
        assert self._log is not None
        assert self.config is not None
        if not self.config.discovery.enabled or self._api_client is None:
            self._log.info("discovery cache disabled")
            self._discovery = None
            return

        self._log.debug("starting discovery cache")
        self._discovery = DiscoveryCache()
        try:
            kinds = await self._discovery.refresh(self._api_client)
            self._log.info("discovery cache started", kinds=kinds)
        except Exception as exc:
            self._log.warning("discovery refresh failed; cache is empty", error=str(exc))

    def _start_binder(self) -> None:
        assert self._log is not None
        assert self.config is not None
        self._informer_factory = SharedInformerFactory()
        namespace_resolver = DefaultNamespaceResolver(self.config.namespace)
        binder = WatchBinder(
            self._informer_factory,
            ambient_namespace=namespace_resolver.resolve_namespace,
            suppliers=self.suppliers,
            discovery=self._discovery,
            default_resync_period=self.config.informer.resync_period,
        )
        self._handler_factory = HandlerFactory(binder)
        self._log.info("watch binder started", discovery=self._discovery is not None)

    def _start_handlers(self) -> None:
        """Import, construct and bind every handler listed in the configuration."""
        assert self._log is not None
        assert self.config is not None
        for path in self.config.informer.handlers:
            try:
                handler_cls = _import_handler(path)
                self.create(handler_cls)
            except Exception as exc:
                raise _ComponentError(f"handler {path}", exc) from exc

    async def _start_rest(self) -> None:
        """Start the uvicorn server for the introspection API."""
        assert self._log is not None
        assert self.config is not None
        assert self._informer_factory is not None
        if not self.config.api.enabled:
            self._log.info("rest api disabled (api.enabled=false)")
            return

        self._log.debug("starting rest api")
        try:
            import uvicorn  # type: ignore[import-untyped]

            from kubeinformer.api import create_app

            fastapi_app = create_app(informer_factory=self._informer_factory, config=self.config)
            uv_config = uvicorn.Config(
                app=fastapi_app,
                host="0.0.0.0",
                port=self.config.api.port,
                log_config=None,  # structlog handles all logging
                access_log=False,
            )
            server = uvicorn.Server(uv_config)
            task = asyncio.create_task(server.serve(), name="rest-server")
            self._background_tasks.append(task)
            self._rest_server = server
            self._log.info("rest api started", port=self.config.api.port)
        except Exception as exc:
            raise _ComponentError("rest", exc) from exc

    # ------------------------------------------------------------------
    # Handler construction
    # ------------------------------------------------------------------

    def create(self, handler_cls: type[H], *args: Any, **kwargs: Any) -> H:
        """Construct *handler_cls* and bind it to its shared informers."""
        if self._handler_factory is None:
            raise RuntimeError("InformerApp.start() must complete before handlers are created")
        handler = self._handler_factory.create(handler_cls, *args, **kwargs)
        self._handlers.append(handler)
        return handler

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def stop(self) -> None:
        """Gracefully stop all components in reverse startup order."""
        if not self._running and self._log is None:
            return

        log = self._log or get_logger("app")
        log.info("kubeinformer shutting down")

        self._running = False

        if self._rest_server is not None:
            self._rest_server.should_exit = True

        for task in reversed(self._background_tasks):
            if not task.done():
                task.cancel()
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)
        self._background_tasks.clear()
        self._rest_server = None

        if self._informer_factory is not None:
            try:
                self._informer_factory.stop_all()
            except Exception as exc:
                log.error("component stop raised an error", component="informers", error=str(exc))

        self._handlers.clear()
        await self._stop_k8s_client()

        log.info("kubeinformer stopped")

    async def _stop_k8s_client(self) -> None:
        """Close the kubernetes-asyncio ApiClient connection pool."""
        if self._api_client is None:
            return
        log = self._log or get_logger("app")
        try:
            await asyncio.wait_for(self._api_client.close(), timeout=_SHUTDOWN_GRACE_SECONDS)
        except TimeoutError:
            log.warning("k8s client close timed out", timeout=_SHUTDOWN_GRACE_SECONDS)
        except Exception as exc:
            log.debug("k8s client close raised (non-fatal)", error=str(exc))
        self._api_client = None


def _kubeinformer_version() -> str:
    from kubeinformer import __version__

    return __version__


# ---------------------------------------------------------------------------
# Async entrypoint
# ---------------------------------------------------------------------------


async def main() -> None:
    """Create the app, register OS signals, run until shutdown is requested."""
    app = InformerApp()
    loop = asyncio.get_running_loop()

    shutdown_triggered = False

    def _request_shutdown() -> None:
        nonlocal shutdown_triggered
        if shutdown_triggered:
            return
        shutdown_triggered = True
        asyncio.create_task(app.stop(), name="shutdown")

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, _request_shutdown)

    try:
        await app.start()
        while app._running:
            await asyncio.sleep(1)
    except _ComponentError as exc:
        log = get_logger("app")
        log.critical(
            "fatal startup error",
            component=exc.component,
            error=str(exc.cause),
        )
        await app.stop()
        raise SystemExit(1) from exc
    finally:
        if app._running:
            await app.stop()

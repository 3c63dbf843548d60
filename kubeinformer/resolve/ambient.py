"""The namespace kubeinformer itself runs in."""

from __future__ import annotations

import threading
from pathlib import Path

from kubeinformer.models.config import NamespaceConfig
from kubeinformer.observability.logging import get_logger

_logger = get_logger("resolve.ambient")

DEFAULT_NAMESPACE = "default"


class DefaultNamespaceResolver:
    """Resolves the ambient namespace once and caches it.

    Lookup order: the configured namespace, the service account namespace
    file mounted into every pod, then ``"default"``.
    """

    def __init__(self, config: NamespaceConfig | None = None) -> None:
        self._config = config or NamespaceConfig()
        self._namespace: str | None = None
        self._lock = threading.Lock()

    def resolve_namespace(self) -> str:
        with self._lock:
            if self._namespace is None:
                self._namespace = self._detect()
            return self._namespace

    def _detect(self) -> str:
        if self._config.namespace:
            _logger.debug("namespace_from_config", namespace=self._config.namespace)
            return self._config.namespace

        path = Path(self._config.service_account_path)
        try:
            namespace = path.read_text(encoding="utf-8").strip()
        except OSError:
            namespace = ""
        if namespace:
            _logger.debug("namespace_from_service_account", namespace=namespace, path=str(path))
            return namespace

        _logger.info("namespace_defaulted", namespace=DEFAULT_NAMESPACE)
        return DEFAULT_NAMESPACE

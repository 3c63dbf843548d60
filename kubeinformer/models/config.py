"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class NamespaceConfig:
    """Ambient namespace configuration.

    An empty ``namespace`` means "detect from the service account".
    """

    namespace: str = ""
    service_account_path: str = "/var/run/secrets/kubernetes.io/serviceaccount/namespace"


@dataclass
class DiscoveryConfig:
    """Discovery cache configuration."""

    enabled: bool = True


@dataclass
class InformerConfig:
    """Shared informer defaults and handlers to bind at startup.

    ``handlers`` holds ``module:ClassName`` paths.
    """

    resync_period: float = 0.0
    handlers: list[str] = field(default_factory=list)


@dataclass
class APIConfig:
    """REST API configuration."""

    enabled: bool = True
    port: int = 8080


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class KubeInformerConfig:
    """Top-level kubeinformer configuration."""

    namespace: NamespaceConfig = field(default_factory=NamespaceConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    informer: InformerConfig = field(default_factory=InformerConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log: LogConfig = field(default_factory=LogConfig)

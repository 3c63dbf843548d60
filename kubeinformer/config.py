"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from kubeinformer.models.config import (
    APIConfig,
    DiscoveryConfig,
    InformerConfig,
    KubeInformerConfig,
    LogConfig,
    NamespaceConfig,
)


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBEINFORMER_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_float(key: str, default: float) -> float:
    return float(_env(key, str(default)))


def _env_list(key: str) -> list[str]:
    return [item.strip() for item in _env(key, "").split(",") if item.strip()]


def _validate_resync_period(value: float) -> float:
    if value < 0:
        raise ValueError(f"Invalid resync period: {value}. Must be >= 0 seconds")
    return value


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> KubeInformerConfig:
    """Load configuration from KUBEINFORMER_* environment variables."""
    defaults = NamespaceConfig()
    return KubeInformerConfig(
        namespace=NamespaceConfig(
            namespace=_env("NAMESPACE", ""),
            service_account_path=_env("SERVICE_ACCOUNT_NAMESPACE_PATH", defaults.service_account_path),
        ),
        discovery=DiscoveryConfig(
            enabled=_env_bool("DISCOVERY_ENABLED", True),
        ),
        informer=InformerConfig(
            resync_period=_validate_resync_period(_env_float("RESYNC_PERIOD", 0.0)),
            handlers=_env_list("HANDLERS"),
        ),
        api=APIConfig(
            enabled=_env_bool("API_ENABLED", True),
            port=_env_int("API_PORT", 8080, min_val=1024, max_val=65535),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )

"""Prometheus metrics for informer creation and handler binding.

All collectors are registered on the default registry so that the REST
layer can expose them through ``/metrics`` without extra wiring.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge

informers_created_total = Counter(
    "kubeinformer_informers_created_total",
    "Shared informers created, one per distinct informer key.",
    ["kind"],
)

informers_running = Gauge(
    "kubeinformer_informers_running",
    "Shared informers currently started.",
)

handlers_bound_total = Counter(
    "kubeinformer_handlers_bound_total",
    "Handler bind attempts by outcome.",
    ["outcome"],  # bound | undeclared | failed
)

listener_errors_total = Counter(
    "kubeinformer_listener_errors_total",
    "Exceptions raised by event handlers during dispatch.",
    ["kind"],
)

"""structlog setup for kubeinformer.

Every record is one JSON object on stderr carrying ``component`` (``app``,
``binder``, ``discovery``, ``informer.factory``, ``resolve.namespaces``,
...), ``level``, a UTC ``ts`` and the event name, e.g.::

    {"component": "binder", "event": "handler_bound", "informers": 2, ...}

Modules create their logger at import time with :func:`get_logger`; the
process configures output once at startup via :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(level: str = "info") -> None:
    """Route kubeinformer logs to stderr as JSON, dropping records below *level*.

    Unknown level names fall back to ``info``.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Return a logger whose records are tagged with *component*."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]

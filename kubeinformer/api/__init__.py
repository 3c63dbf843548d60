"""Introspection REST API for kubeinformer.

Exposes:
    create_app -- FastAPI application factory.
"""

from kubeinformer.api.app import create_app

__all__ = ["create_app"]

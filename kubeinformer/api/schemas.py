"""Response models for the introspection API."""

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    detail: str


class HealthResponse(BaseModel):
    status: str
    version: str
    informers: int
    running: int


class InformerInfo(BaseModel):
    kind: str
    api_group: str
    resource_plural: str
    namespace: str | None
    label_selector: str | None
    resync_period: float
    running: bool
    handlers: int


class InformerListResponse(BaseModel):
    informers: list[InformerInfo]

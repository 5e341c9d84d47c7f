"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class PointOut(BaseModel):
    x: float
    y: float


class PolygonOut(BaseModel):
    outer: list[PointOut]
    holes: list[list[PointOut]] = Field(default_factory=list)
    area: float = 0.0


class UnionResponse(BaseModel):
    polygons: list[PolygonOut] = Field(default_factory=list)
    loop_count: int = 0
    hole_count: int = 0
    area: float = 0.0
    processing_time_ms: float = 0.0


class ErrorResponse(BaseModel):
    error: str
    detail: str
    stage: str | None = None

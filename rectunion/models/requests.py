"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RectangleIn(BaseModel):
    x: float
    y: float
    width: float = Field(..., description="May be negative; the anchor moves accordingly")
    height: float = Field(..., description="May be negative; the anchor moves accordingly")


class UnionRequest(BaseModel):
    rectangles: list[RectangleIn] = Field(
        default_factory=list,
        description="Axis-aligned rectangles given by top-left corner plus size",
    )
    simplify: bool = Field(default=True, description="Collapse collinear vertices")
    verify_coverage: bool = Field(
        default=False,
        description="Re-rasterize the result and check it against the coverage grid",
    )

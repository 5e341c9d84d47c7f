"""UnionContext: the single mutable state object flowing through all stages.

Each stage reads what the previous stages wrote and adds its own output.
A context lives for exactly one compute_union_boundary() call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from rectunion.engine.config import PipelineConfig
from rectunion.engine.shapes import (
    BoundaryEdge,
    GridVertex,
    PolygonLoop,
    Rectangle,
    UnionBoundary,
    UnionPolygon,
)


@dataclass
class UnionContext:
    """Shared state flowing through the entire pipeline."""

    # Raw input as handed to the pipeline (Rectangle, mapping or 4-sequence)
    raw_rectangles: list[Any] = field(default_factory=list)
    config: PipelineConfig = field(default_factory=PipelineConfig)

    # --- U0.01 ---
    # Normalized, non-degenerate rectangles
    rectangles: list[Rectangle] = field(default_factory=list)
    dropped_degenerate: int = 0

    # --- U0.02 ---
    # Compressed axes: strictly increasing, no duplicates
    xs: tuple[float, ...] = ()
    ys: tuple[float, ...] = ()
    # Exact-match lookup from coordinate value to axis index
    x_index: dict[float, int] = field(default_factory=dict)
    y_index: dict[float, int] = field(default_factory=dict)

    # --- U1.01 ---
    # coverage[i, j] covers [xs[i], xs[i+1]) x [ys[j], ys[j+1])
    coverage: NDArray[np.bool_] | None = None

    # --- U2.01 ---
    edges: list[BoundaryEdge] = field(default_factory=list)

    # --- U3.01 ---
    # Simple closed loops in grid space, first vertex not repeated
    grid_loops: list[tuple[GridVertex, ...]] = field(default_factory=list)

    # --- U3.02 / U4.01 ---
    polygons: list[UnionPolygon] = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    timings_ms: dict[str, float] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def grid_shape(self) -> tuple[int, int]:
        return (max(len(self.xs) - 1, 0), max(len(self.ys) - 1, 0))

    @property
    def cell_count(self) -> int:
        w, h = self.grid_shape
        return w * h

    @property
    def loops(self) -> list[PolygonLoop]:
        return [loop for poly in self.polygons for loop in poly.loops]

    def to_real(self, vertex: GridVertex) -> tuple[float, float]:
        """Grid vertex → real (x, y) coordinate."""
        return (self.xs[vertex[0]], self.ys[vertex[1]])

    def result(self) -> UnionBoundary:
        return UnionBoundary(polygons=list(self.polygons))

"""Pipeline configuration: controls limits and optional stages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PipelineConfig:
    """Tunables for a single union-boundary computation."""

    # Upper bound on (len(xs) - 1) * (len(ys) - 1) before allocating the grid
    max_grid_cells: int = 4_000_000

    # Collapse collinear vertices (U4.01)
    simplify: bool = True

    # Re-rasterize the result and compare against the coverage grid (U4.02)
    verify_coverage: bool = False

    # Zero-area rectangles raise InvalidInput instead of being dropped
    reject_degenerate: bool = False

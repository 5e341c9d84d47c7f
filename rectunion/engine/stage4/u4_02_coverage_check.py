"""U4.02 — Coverage Round-Trip Check.

Re-rasterize the result by testing every grid cell centre against the
polygons (inside an outer loop and outside its holes) and compare with the
coverage grid. Any difference means the assembled loops are wrong.
Runs only with config.verify_coverage.
"""

from __future__ import annotations

import logging

import numpy as np
import shapely
from numpy.typing import NDArray

from rectunion.engine.context import UnionContext
from rectunion.engine.errors import DegenerateTopology
from rectunion.engine.registry import Stage, transform
from rectunion.engine.shapes import UnionPolygon

logger = logging.getLogger(__name__)


def cell_centres(
    xs: tuple[float, ...],
    ys: tuple[float, ...],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Centre coordinates of every grid cell, indexed [i, j] like the coverage grid."""
    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)
    cx = (x[:-1] + x[1:]) / 2
    cy = (y[:-1] + y[1:]) / 2
    gx, gy = np.meshgrid(cx, cy, indexing="ij")
    return gx, gy


def rasterize_polygons(
    polygons: list[UnionPolygon],
    xs: tuple[float, ...],
    ys: tuple[float, ...],
) -> NDArray[np.bool_]:
    """Coverage grid reconstructed from polygon loops via cell-centre containment.

    Centres never lie on a loop (loops run along grid lines), so interior
    containment is exact.
    """
    shape = (max(len(xs) - 1, 0), max(len(ys) - 1, 0))
    grid = np.zeros(shape, dtype=np.bool_)
    if not polygons or grid.size == 0:
        return grid

    cx, cy = cell_centres(xs, ys)
    for poly in polygons:
        grid |= shapely.contains_xy(poly.to_shapely(), cx, cy)
    return grid


@transform(
    id="U4.02",
    stage=Stage.OUTPUT,
    dependencies=["U3.02"],
    enabled=lambda config: config.verify_coverage,
    description="Verify the loops reproduce the coverage grid",
)
def coverage_check(ctx: UnionContext) -> None:
    if ctx.coverage is None:
        return
    rebuilt = rasterize_polygons(ctx.polygons, ctx.xs, ctx.ys)
    mismatched = np.argwhere(rebuilt != ctx.coverage)
    if len(mismatched):
        cells = [tuple(int(v) for v in c) for c in mismatched[:5]]
        raise DegenerateTopology(
            f"Loops disagree with coverage grid in {len(mismatched)} cells, e.g. {cells}"
        )
    logger.debug("Coverage round-trip matched %d cells", ctx.coverage.size)

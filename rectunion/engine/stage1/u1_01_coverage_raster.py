"""U1.01 — Coverage Rasterization.

Mark every compressed-grid cell covered by at least one rectangle. Cell
boundaries are the rectangle edges themselves, so coverage is constant
within a cell and the raster is exact.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from rectunion.engine.context import UnionContext
from rectunion.engine.registry import Stage, transform
from rectunion.engine.shapes import Rectangle


def rasterize(
    rectangles: list[Rectangle],
    x_index: dict[float, int],
    y_index: dict[float, int],
    shape: tuple[int, int],
) -> NDArray[np.bool_]:
    """Boolean grid where grid[i, j] is True iff cell (i, j) is covered."""
    grid = np.zeros(shape, dtype=np.bool_)
    for r in rectangles:
        i0, i1 = x_index[r.x], x_index[r.x + r.width]
        j0, j1 = y_index[r.y], y_index[r.y + r.height]
        grid[i0:i1, j0:j1] = True
    return grid


@transform(
    id="U1.01",
    stage=Stage.RASTER,
    dependencies=["U0.02"],
    description="Rasterize rectangle union onto the compressed grid",
)
def coverage_raster(ctx: UnionContext) -> None:
    ctx.coverage = rasterize(ctx.rectangles, ctx.x_index, ctx.y_index, ctx.grid_shape)

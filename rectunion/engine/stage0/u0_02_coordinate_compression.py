"""U0.02 — Coordinate Compression.

Collect the distinct x and y edge coordinates into sorted axes and map each
value to its grid index. Lookup is exact: callers snap inputs beforehand.
The grid size is checked against config.max_grid_cells before anything is
allocated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from rectunion.engine.context import UnionContext
from rectunion.engine.errors import ResourceLimitExceeded
from rectunion.engine.registry import Stage, transform
from rectunion.engine.shapes import Rectangle

logger = logging.getLogger(__name__)


def compress_axis(values: Iterable[float]) -> tuple[tuple[float, ...], dict[float, int]]:
    """Sorted distinct values plus value → index lookup."""
    axis = tuple(sorted(set(values)))
    return axis, {v: i for i, v in enumerate(axis)}


def compress(
    rectangles: list[Rectangle],
) -> tuple[tuple[float, ...], dict[float, int], tuple[float, ...], dict[float, int]]:
    xs, x_index = compress_axis(v for r in rectangles for v in (r.x, r.x + r.width))
    ys, y_index = compress_axis(v for r in rectangles for v in (r.y, r.y + r.height))
    return xs, x_index, ys, y_index


@transform(
    id="U0.02",
    stage=Stage.INPUT,
    dependencies=["U0.01"],
    description="Compress rectangle edge coordinates into a sparse grid index",
)
def coordinate_compression(ctx: UnionContext) -> None:
    xs, x_index, ys, y_index = compress(ctx.rectangles)

    cells = max(len(xs) - 1, 0) * max(len(ys) - 1, 0)
    limit = ctx.config.max_grid_cells
    if cells > limit:
        raise ResourceLimitExceeded(cells, limit)

    ctx.xs, ctx.x_index = xs, x_index
    ctx.ys, ctx.y_index = ys, y_index
    logger.debug("Compressed grid: %d x %d cells", len(xs) - 1, len(ys) - 1)

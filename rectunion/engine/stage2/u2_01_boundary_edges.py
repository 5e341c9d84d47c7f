"""U2.01 — Boundary Edge Extraction.

Every grid line segment with a covered cell on one side and an uncovered
cell (or the outside of the grid) on the other becomes a directed unit edge.
Edges are oriented with the covered cell on the right-hand side (screen
coordinates, y down), so outer boundaries come out clockwise and hole
boundaries counter-clockwise.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from rectunion.engine.context import UnionContext
from rectunion.engine.registry import Stage, transform
from rectunion.engine.shapes import BoundaryEdge


def extract_edges(coverage: NDArray[np.bool_]) -> list[BoundaryEdge]:
    """Directed boundary edges of a coverage grid, sorted."""
    if coverage.size == 0:
        return []

    # One ring of uncovered cells around the grid stands in for the outside
    padded = np.pad(coverage, 1, mode="constant", constant_values=False)
    edges: list[BoundaryEdge] = []

    # Vertical grid line x=k between cell (k-1, j) on the left and (k, j) on the right
    left = padded[:-1, 1:-1]
    right = padded[1:, 1:-1]
    for k, j in np.argwhere(left & ~right):
        # covered on the west → walk south
        edges.append(BoundaryEdge((int(k), int(j)), (int(k), int(j) + 1)))
    for k, j in np.argwhere(right & ~left):
        # covered on the east → walk north
        edges.append(BoundaryEdge((int(k), int(j) + 1), (int(k), int(j))))

    # Horizontal grid line y=k between cell (i, k-1) above and (i, k) below
    above = padded[1:-1, :-1]
    below = padded[1:-1, 1:]
    for i, k in np.argwhere(below & ~above):
        # covered to the south → walk east
        edges.append(BoundaryEdge((int(i), int(k)), (int(i) + 1, int(k))))
    for i, k in np.argwhere(above & ~below):
        # covered to the north → walk west
        edges.append(BoundaryEdge((int(i) + 1, int(k)), (int(i), int(k))))

    edges.sort()
    return edges


@transform(
    id="U2.01",
    stage=Stage.EDGES,
    dependencies=["U1.01"],
    description="Extract directed boundary edges between covered and uncovered cells",
)
def boundary_edges(ctx: UnionContext) -> None:
    if ctx.coverage is None:
        ctx.edges = []
        return
    ctx.edges = extract_edges(ctx.coverage)

"""U3.02 — Loop Classification and Grouping.

Positive signed area (clockwise on screen) → outer loop, negative → hole.
Each hole is assigned to the smallest outer loop containing a probe point
taken from the uncovered cell next to the hole's first edge; with
rectilinear loops that never cross, one probe decides containment.
Containment is tested in grid space, which the monotone compression maps
one-to-one onto real coordinates.
"""

from __future__ import annotations

import logging

import numpy as np

from rectunion.engine.context import UnionContext
from rectunion.engine.errors import DegenerateTopology
from rectunion.engine.registry import Stage, transform
from rectunion.engine.shapes import GridVertex, LoopKind, PolygonLoop, UnionPolygon
from rectunion.utils.geometry import bbox, bbox_contains, closed_ring, signed_area, winding_number

logger = logging.getLogger(__name__)


def canonical_start(loop: tuple[GridVertex, ...]) -> tuple[GridVertex, ...]:
    """Rotate so the loop starts at its leftmost, then topmost, vertex (always a corner)."""
    k = loop.index(min(loop))
    return loop[k:] + loop[:k]


def hole_probe(loop: tuple[GridVertex, ...]) -> tuple[float, float]:
    """Centre of the uncovered cell on the left of the loop's first edge."""
    (i0, j0), (i1, j1) = loop[0], loop[1]
    dx, dy = i1 - i0, j1 - j0
    # left-hand side on screen of (dx, dy) is (dy, -dx)
    return ((i0 + i1) / 2 + dy / 2, (j0 + j1) / 2 - dx / 2)


def _find_owner(
    hole: tuple[GridVertex, ...],
    outers: list[tuple[tuple[GridVertex, ...], float]],
) -> int | None:
    probe = hole_probe(hole)
    hole_box = bbox(hole)
    best: int | None = None
    best_area = float("inf")
    for idx, (outer, area) in enumerate(outers):
        if area >= best_area or not bbox_contains(bbox(outer), hole_box):
            continue
        if winding_number(probe, closed_ring(outer)) != 0:
            best, best_area = idx, area
    return best


def group_loops(
    grid_loops: list[tuple[GridVertex, ...]],
) -> list[tuple[tuple[GridVertex, ...], list[tuple[GridVertex, ...]]]]:
    """Pair each outer grid loop with the hole grid loops it directly contains."""
    outers: list[tuple[tuple[GridVertex, ...], float]] = []
    holes: list[tuple[GridVertex, ...]] = []
    for loop in grid_loops:
        area = signed_area(np.asarray(loop, dtype=np.float64))
        if area > 0:
            outers.append((canonical_start(loop), area))
        elif area < 0:
            holes.append(canonical_start(loop))
        else:
            raise DegenerateTopology(f"Zero-area boundary loop starting at {loop[0]}")

    groups: list[tuple[tuple[GridVertex, ...], list[tuple[GridVertex, ...]]]] = [
        (outer, []) for outer, _ in outers
    ]
    for hole in holes:
        owner = _find_owner(hole, outers)
        if owner is None:
            raise DegenerateTopology(f"Hole loop starting at {hole[0]} has no enclosing outer loop")
        groups[owner][1].append(hole)

    groups.sort(key=lambda g: g[0][0])
    for _, owned in groups:
        owned.sort(key=lambda h: h[0])
    return groups


@transform(
    id="U3.02",
    stage=Stage.LOOPS,
    dependencies=["U3.01"],
    description="Classify loops as outer/hole by signed area and attach holes to outers",
)
def loop_classification(ctx: UnionContext) -> None:
    def to_loop(grid_loop: tuple[GridVertex, ...], kind: LoopKind) -> PolygonLoop:
        return PolygonLoop(tuple(ctx.to_real(v) for v in grid_loop), kind)

    ctx.polygons = [
        UnionPolygon(
            outer=to_loop(outer, LoopKind.OUTER),
            holes=tuple(to_loop(h, LoopKind.HOLE) for h in owned),
        )
        for outer, owned in group_loops(ctx.grid_loops)
    ]
    logger.debug(
        "Classified %d outer loops, %d holes",
        len(ctx.polygons),
        sum(len(p.holes) for p in ctx.polygons),
    )

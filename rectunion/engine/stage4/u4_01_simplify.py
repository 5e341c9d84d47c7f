"""U4.01 — Polygon Simplification.

Traced loops carry one vertex per grid line they cross. A single pass drops
every vertex whose incoming and outgoing directions match, leaving only the
corners. Order and starting corner are kept, so simplifying twice changes
nothing.
"""

from __future__ import annotations

from rectunion.engine.context import UnionContext
from rectunion.engine.registry import Stage, transform
from rectunion.engine.shapes import Point, PolygonLoop, UnionPolygon
from rectunion.utils.geometry import direction


def simplify_points(points: tuple[Point, ...]) -> tuple[Point, ...]:
    """Drop vertices that continue straight on.

    Slivers left with fewer than 4 corners are returned as they are; the
    caller decides whether to discard them.
    """
    n = len(points)
    if n < 3:
        return points

    return tuple(
        p
        for k, p in enumerate(points)
        if direction(points[k - 1], p) != direction(p, points[(k + 1) % n])
    )


def simplify_loop(loop: PolygonLoop) -> PolygonLoop:
    return PolygonLoop(simplify_points(loop.points), loop.kind)


def simplify_polygon(polygon: UnionPolygon) -> UnionPolygon:
    return UnionPolygon(
        outer=simplify_loop(polygon.outer),
        holes=tuple(simplify_loop(h) for h in polygon.holes),
    )


@transform(
    id="U4.01",
    stage=Stage.OUTPUT,
    dependencies=["U3.02"],
    enabled=lambda config: config.simplify,
    description="Collapse collinear vertices to the minimal corner set",
)
def polygon_simplification(ctx: UnionContext) -> None:
    ctx.polygons = [simplify_polygon(p) for p in ctx.polygons]

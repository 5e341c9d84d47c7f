"""Value types flowing in and out of the union-boundary pipeline.

Rectangle         - input, top-left corner plus width/height
BoundaryEdge      - directed unit edge between two grid vertices
PolygonLoop       - one closed rectilinear loop in real coordinates
UnionPolygon      - one connected component: outer loop plus its holes
UnionBoundary     - the full result of one call
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from shapely.geometry import MultiPolygon, Polygon

from rectunion.utils.geometry import bbox, point_in_polygon, signed_area

# (i, j) index into (xs, ys)
GridVertex = tuple[int, int]
Point = tuple[float, float]


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float

    def normalized(self) -> Rectangle:
        """Same area with the anchor moved so width/height are non-negative."""
        x, width = (self.x + self.width, -self.width) if self.width < 0 else (self.x, self.width)
        y, height = (self.y + self.height, -self.height) if self.height < 0 else (self.y, self.height)
        return Rectangle(x, y, width, height)

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height))

    @property
    def is_degenerate(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def area(self) -> float:
        return abs(self.width * self.height)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(x0, y0, x1, y1) of the normalized rectangle."""
        r = self.normalized()
        return (r.x, r.y, r.x + r.width, r.y + r.height)


@dataclass(frozen=True, order=True)
class BoundaryEdge:
    """Unit edge in grid space with the covered cell on its right-hand side.

    "Right" is taken on screen (y down): walking east the covered cell lies
    to the south, walking south it lies to the west.
    """

    start: GridVertex
    end: GridVertex

    @property
    def direction(self) -> tuple[int, int]:
        return (self.end[0] - self.start[0], self.end[1] - self.start[1])


class LoopKind(str, enum.Enum):
    OUTER = "outer"
    HOLE = "hole"


@dataclass(frozen=True)
class PolygonLoop:
    """Closed rectilinear loop; the first vertex is not repeated at the end.

    Outer loops run clockwise on screen (positive signed area), holes run
    counter-clockwise.
    """

    points: tuple[Point, ...]
    kind: LoopKind

    @property
    def signed_area(self) -> float:
        return signed_area(self.points)

    @property
    def area(self) -> float:
        return abs(self.signed_area)

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        return bbox(self.points)

    def contains_point(self, point: Point) -> bool:
        return point_in_polygon(point, self.points)

    def to_points(self) -> list[dict[str, float]]:
        return [{"x": x, "y": y} for x, y in self.points]

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class UnionPolygon:
    """One connected component of the union interior."""

    outer: PolygonLoop
    holes: tuple[PolygonLoop, ...] = ()

    @property
    def area(self) -> float:
        return self.outer.area - sum(h.area for h in self.holes)

    @property
    def loops(self) -> list[PolygonLoop]:
        return [self.outer, *self.holes]

    def contains_point(self, point: Point) -> bool:
        if not self.outer.contains_point(point):
            return False
        return not any(h.contains_point(point) for h in self.holes)

    def to_shapely(self) -> Polygon:
        return Polygon(self.outer.points, [h.points for h in self.holes])


@dataclass
class UnionBoundary:
    """Result of compute_union_boundary(); computed fresh for every call."""

    polygons: list[UnionPolygon] = field(default_factory=list)

    @property
    def loops(self) -> list[PolygonLoop]:
        return [loop for poly in self.polygons for loop in poly.loops]

    @property
    def outer_loops(self) -> list[PolygonLoop]:
        return [poly.outer for poly in self.polygons]

    @property
    def hole_loops(self) -> list[PolygonLoop]:
        return [h for poly in self.polygons for h in poly.holes]

    @property
    def area(self) -> float:
        return sum(poly.area for poly in self.polygons)

    @property
    def is_empty(self) -> bool:
        return not self.polygons

    def contains_point(self, point: Point) -> bool:
        return any(poly.contains_point(point) for poly in self.polygons)

    def to_shapely(self) -> MultiPolygon:
        return MultiPolygon([poly.to_shapely() for poly in self.polygons])

    def __len__(self) -> int:
        return len(self.polygons)

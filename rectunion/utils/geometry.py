"""Leaf-node geometry helpers. No engine imports.

Coordinates are screen-style: x grows right, y grows down.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

Coord = tuple[float, float]


def as_array(points: Sequence[Coord] | NDArray[np.float64]) -> NDArray[np.float64]:
    """Nx2 float array from a point sequence."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2))
    return arr.reshape(-1, 2)


def closed_ring(points: Sequence[Coord] | NDArray[np.float64]) -> NDArray[np.float64]:
    """Return the points with the first vertex repeated at the end."""
    arr = as_array(points)
    if len(arr) == 0:
        return arr
    return np.vstack([arr, arr[:1]])


def signed_area(points: Sequence[Coord] | NDArray[np.float64]) -> float:
    """Shoelace formula over an implicitly closed ring.

    In y-down coordinates a clockwise-on-screen ring is positive.
    """
    ring = closed_ring(points)
    if len(ring) < 4:
        return 0.0
    x = ring[:, 0]
    y = ring[:, 1]
    return float(0.5 * np.sum(x[:-1] * y[1:] - x[1:] * y[:-1]))


def bbox(points: Sequence[Coord] | NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    arr = as_array(points)
    if len(arr) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(arr[:, 0])),
        float(np.min(arr[:, 1])),
        float(np.max(arr[:, 0])),
        float(np.max(arr[:, 1])),
    )


def bbox_contains(
    outer: tuple[float, float, float, float],
    inner: tuple[float, float, float, float],
) -> bool:
    return (
        outer[0] <= inner[0]
        and outer[1] <= inner[1]
        and outer[2] >= inner[2]
        and outer[3] >= inner[3]
    )


def winding_number(point: Coord, polygon_points: NDArray[np.float64]) -> int:
    """Compute winding number of point w.r.t. a closed polygon ring.

    ``polygon_points`` must repeat its first vertex at the end.
    Non-zero → point is inside polygon.
    """
    px, py = point
    x = polygon_points[:, 0]
    y = polygon_points[:, 1]
    n = len(x)

    wn = 0
    for i in range(n - 1):
        if y[i] <= py:
            if y[i + 1] > py:
                cross = (x[i + 1] - x[i]) * (py - y[i]) - (px - x[i]) * (y[i + 1] - y[i])
                if cross > 0:
                    wn += 1
        else:
            if y[i + 1] <= py:
                cross = (x[i + 1] - x[i]) * (py - y[i]) - (px - x[i]) * (y[i + 1] - y[i])
                if cross < 0:
                    wn -= 1
    return wn


def point_in_polygon(point: Coord, polygon_points: Sequence[Coord] | NDArray[np.float64]) -> bool:
    """Containment test for an open ring (first vertex not repeated)."""
    return winding_number(point, closed_ring(polygon_points)) != 0


def direction(a: Sequence[float], b: Sequence[float]) -> tuple[int, int]:
    """Sign vector of the step a → b, e.g. (1, 0) for a step to the right."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return (int(dx > 0) - int(dx < 0), int(dy > 0) - int(dy < 0))

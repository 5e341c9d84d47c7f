"""Shared test fixtures."""

from __future__ import annotations

import pytest

from rectunion.engine.pipeline import load_transforms

load_transforms()


# Sample data from the comparison page

SAMPLE_RECTANGLES = [
    {"x": 2, "y": 2, "width": 5, "height": 4},
    {"x": 4, "y": 3, "width": 6, "height": 6},
    {"x": 8, "y": 1, "width": 5, "height": 4},
]

SAMPLE_OUTLINE = [
    (2, 2), (7, 2), (7, 3), (8, 3), (8, 1), (13, 1),
    (13, 5), (10, 5), (10, 9), (4, 9), (4, 6), (2, 6),
]

SAMPLE_RECTANGLES_2 = [
    {"x": 3, "y": 2, "width": 5, "height": 4},
    {"x": 2, "y": 2, "width": 6, "height": 6},
    {"x": 8, "y": 2, "width": 5, "height": 7},
]

SAMPLE_OUTLINE_2 = [(2, 2), (13, 2), (13, 9), (8, 9), (8, 8), (2, 8)]

# Square frame 3x3 with an empty 1x1 centre
FRAME_RECTANGLES = [
    {"x": 0, "y": 0, "width": 3, "height": 1},
    {"x": 0, "y": 2, "width": 3, "height": 1},
    {"x": 0, "y": 1, "width": 1, "height": 1},
    {"x": 2, "y": 1, "width": 1, "height": 1},
]

DISJOINT_RECTANGLES = [
    {"x": 0, "y": 0, "width": 1, "height": 1},
    {"x": 5, "y": 5, "width": 1, "height": 1},
]

# Two unit squares touching only at (1, 1)
PINCH_RECTANGLES = [
    {"x": 0, "y": 0, "width": 1, "height": 1},
    {"x": 1, "y": 1, "width": 1, "height": 1},
]

# 4x4 block with uncovered cells (1, 1) and (2, 2) touching at (2, 2)
HOLE_PINCH_RECTANGLES = [
    {"x": 0, "y": 0, "width": 4, "height": 1},
    {"x": 0, "y": 3, "width": 4, "height": 1},
    {"x": 0, "y": 1, "width": 1, "height": 1},
    {"x": 2, "y": 1, "width": 2, "height": 1},
    {"x": 0, "y": 2, "width": 2, "height": 1},
    {"x": 3, "y": 2, "width": 1, "height": 1},
]

# 3x3 block missing the centre and the bottom-right corner; the centre
# pocket reaches the outside only through the vertex (2, 2)
POCKET_RECTANGLES = [
    {"x": 0, "y": 0, "width": 3, "height": 1},
    {"x": 0, "y": 1, "width": 1, "height": 2},
    {"x": 2, "y": 1, "width": 1, "height": 1},
    {"x": 1, "y": 2, "width": 1, "height": 1},
]


def rotations_of(points: list[tuple[float, float]]) -> list[list[tuple[float, float]]]:
    """Every rotation of a cyclic point list, in both directions."""
    out = []
    for seq in (list(points), list(reversed(points))):
        for k in range(len(seq)):
            out.append(seq[k:] + seq[:k])
    return out


@pytest.fixture
def sample_rectangles() -> list[dict[str, float]]:
    return [dict(r) for r in SAMPLE_RECTANGLES]


@pytest.fixture
def frame_rectangles() -> list[dict[str, float]]:
    return [dict(r) for r in FRAME_RECTANGLES]


@pytest.fixture
def disjoint_rectangles() -> list[dict[str, float]]:
    return [dict(r) for r in DISJOINT_RECTANGLES]

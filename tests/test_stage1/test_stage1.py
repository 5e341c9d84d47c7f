"""Tests for stage 1: coverage rasterization."""

import numpy as np

import rectunion.engine.stage1.u1_01_coverage_raster

from rectunion.engine.context import UnionContext
from rectunion.engine.pipeline import Pipeline
from rectunion.engine.registry import Stage
from rectunion.engine.shapes import Rectangle
from rectunion.engine.stage0.u0_02_coordinate_compression import compress
from rectunion.engine.stage1.u1_01_coverage_raster import rasterize
from tests.conftest import FRAME_RECTANGLES, SAMPLE_RECTANGLES


def _raster(rects):
    xs, x_index, ys, y_index = compress(rects)
    return rasterize(rects, x_index, y_index, (len(xs) - 1, len(ys) - 1))


def test_single_rectangle_single_cell():
    grid = _raster([Rectangle(3, 4, 10, 2)])
    assert grid.shape == (1, 1)
    assert grid.all()


def test_disjoint_leaves_gap_cells_empty():
    grid = _raster([Rectangle(0, 0, 1, 1), Rectangle(5, 5, 1, 1)])
    expected = np.array(
        [
            [True, False, False],
            [False, False, False],
            [False, False, True],
        ]
    )
    np.testing.assert_array_equal(grid, expected)


def test_overlap_cells():
    # a covers x∈[0,2), b covers x∈[1,3); same y span
    grid = _raster([Rectangle(0, 0, 2, 1), Rectangle(1, 0, 2, 1)])
    np.testing.assert_array_equal(grid, np.array([[True], [True], [True]]))


def test_stage1_on_frame():
    ctx = UnionContext(raw_rectangles=FRAME_RECTANGLES)
    pipeline = Pipeline()
    pipeline.run_stage(ctx, Stage.INPUT)
    pipeline.run_stage(ctx, Stage.RASTER)

    assert ctx.coverage is not None
    assert ctx.coverage.dtype == np.bool_
    assert ctx.coverage.shape == (3, 3)
    assert not ctx.coverage[1, 1]
    assert int(ctx.coverage.sum()) == 8


def test_stage1_on_sample_covered_count():
    ctx = UnionContext(raw_rectangles=SAMPLE_RECTANGLES)
    pipeline = Pipeline()
    pipeline.run_stage(ctx, Stage.INPUT)
    pipeline.run_stage(ctx, Stage.RASTER)

    xs, ys = np.diff(ctx.xs), np.diff(ctx.ys)
    covered_area = float(np.sum(np.outer(xs, ys)[ctx.coverage]))
    assert covered_area == 63.0

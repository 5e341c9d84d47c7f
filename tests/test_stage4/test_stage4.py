"""Tests for stage 4: simplification and coverage round-trip."""

import random

import numpy as np
import pytest

import rectunion.engine.stage4.u4_01_simplify
import rectunion.engine.stage4.u4_02_coverage_check

from rectunion.engine.config import PipelineConfig
from rectunion.engine.context import UnionContext
from rectunion.engine.errors import DegenerateTopology
from rectunion.engine.pipeline import create_pipeline
from rectunion.engine.shapes import LoopKind, PolygonLoop, Rectangle
from rectunion.engine.stage4.u4_01_simplify import simplify_loop, simplify_points
from rectunion.engine.stage4.u4_02_coverage_check import cell_centres, coverage_check, rasterize_polygons
from tests.conftest import HOLE_PINCH_RECTANGLES, POCKET_RECTANGLES, SAMPLE_RECTANGLES


class TestSimplify:
    def test_drops_collinear_vertices(self):
        pts = ((0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (0, 2), (0, 1))
        assert simplify_points(pts) == ((0, 0), (2, 0), (2, 2), (0, 2))

    def test_keeps_start_corner(self):
        pts = ((0, 0), (3, 0), (3, 5), (1, 5), (0, 5))
        assert simplify_points(pts)[0] == (0, 0)

    def test_fixed_point(self):
        rects = [Rectangle(0, 0, 4, 1), Rectangle(1, 0, 1, 3), Rectangle(3, 0, 1, 2)]
        ctx = UnionContext(raw_rectangles=rects)
        create_pipeline(PipelineConfig(simplify=False)).run(ctx)
        for loop in ctx.loops:
            once = simplify_loop(loop)
            assert simplify_loop(once) == once
            assert len(once) <= len(loop)

    def test_sliver_returned_as_is(self):
        pts = ((0, 0), (1, 0), (2, 0))
        assert simplify_points(pts) == ((0, 0), (2, 0))
        assert simplify_points(simplify_points(pts)) == ((0, 0), (2, 0))

    def test_kind_preserved(self):
        hole = PolygonLoop(((1, 1), (1, 2), (1, 3), (2, 3), (2, 1)), LoopKind.HOLE)
        out = simplify_loop(hole)
        assert out.kind is LoopKind.HOLE
        assert out.points == ((1, 1), (1, 3), (2, 3), (2, 1))


class TestCoverageCheck:
    @pytest.mark.parametrize("rects", [SAMPLE_RECTANGLES, HOLE_PINCH_RECTANGLES, POCKET_RECTANGLES])
    def test_round_trip_reproduces_grid(self, rects):
        ctx = UnionContext(raw_rectangles=rects)
        create_pipeline().run(ctx)
        rebuilt = rasterize_polygons(ctx.polygons, ctx.xs, ctx.ys)
        np.testing.assert_array_equal(rebuilt, ctx.coverage)

    def test_random_round_trip(self):
        rng = random.Random(5)
        rects = [
            Rectangle(rng.randint(0, 20), rng.randint(0, 20), rng.randint(1, 7), rng.randint(1, 7))
            for _ in range(40)
        ]
        ctx = UnionContext(raw_rectangles=rects)
        create_pipeline(PipelineConfig(verify_coverage=True)).run(ctx)
        assert "U4.02" in ctx.completed_transforms

    def test_mismatch_raises(self):
        ctx = UnionContext(raw_rectangles=SAMPLE_RECTANGLES)
        create_pipeline().run(ctx)
        assert ctx.coverage is not None
        ctx.coverage[0, 0] = not ctx.coverage[0, 0]
        with pytest.raises(DegenerateTopology, match="disagree"):
            coverage_check(ctx)

    def test_empty_result_passes(self):
        ctx = UnionContext(raw_rectangles=[])
        create_pipeline(PipelineConfig(verify_coverage=True)).run(ctx)
        assert ctx.polygons == []

    def test_cell_centres_follow_grid_indexing(self):
        cx, cy = cell_centres((0.0, 2.0, 3.0), (1.0, 5.0))
        assert cx.shape == cy.shape == (2, 1)
        np.testing.assert_allclose(cx[:, 0], [1.0, 2.5])
        np.testing.assert_allclose(cy[0], [3.0])

    def test_island_in_hole_is_covered_once(self):
        ring = [Rectangle(0, 0, 5, 1), Rectangle(0, 4, 5, 1), Rectangle(0, 1, 1, 3), Rectangle(4, 1, 1, 3)]
        ctx = UnionContext(raw_rectangles=ring + [Rectangle(2, 2, 1, 1)])
        create_pipeline().run(ctx)
        assert len(ctx.polygons) == 2
        np.testing.assert_array_equal(rasterize_polygons(ctx.polygons, ctx.xs, ctx.ys), ctx.coverage)

    def test_hundreds_of_rectangles(self):
        rng = random.Random(150)
        rects = [
            Rectangle(rng.uniform(0, 500), rng.uniform(0, 500), rng.uniform(1, 60), rng.uniform(1, 60))
            for _ in range(150)
        ]
        ctx = UnionContext(raw_rectangles=rects)
        create_pipeline(PipelineConfig(verify_coverage=True)).run(ctx)
        assert "U4.02" in ctx.completed_transforms
        assert ctx.coverage is not None
        assert ctx.coverage.shape == (len(ctx.xs) - 1, len(ctx.ys) - 1)

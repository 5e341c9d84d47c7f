"""POST /api/union: union boundary of a rectangle set."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends

from rectunion.config import Settings
from rectunion.dependencies import get_settings
from rectunion.engine.config import PipelineConfig
from rectunion.engine.pipeline import compute_union_boundary
from rectunion.engine.shapes import PolygonLoop, Rectangle
from rectunion.models.requests import UnionRequest
from rectunion.models.responses import PointOut, PolygonOut, UnionResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _points(loop: PolygonLoop) -> list[PointOut]:
    return [PointOut(x=x, y=y) for x, y in loop.points]


@router.post("/union", response_model=UnionResponse)
def union(req: UnionRequest, settings: Settings = Depends(get_settings)) -> UnionResponse:
    start = time.perf_counter()

    config = PipelineConfig(
        max_grid_cells=settings.rectunion_max_grid_cells,
        simplify=req.simplify,
        verify_coverage=req.verify_coverage,
    )
    rectangles = [Rectangle(r.x, r.y, r.width, r.height) for r in req.rectangles]
    boundary = compute_union_boundary(rectangles, config)

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Union of %d rectangles: %d polygons in %.1fms",
        len(rectangles),
        len(boundary),
        elapsed,
    )

    return UnionResponse(
        polygons=[
            PolygonOut(
                outer=_points(poly.outer),
                holes=[_points(h) for h in poly.holes],
                area=poly.area,
            )
            for poly in boundary.polygons
        ],
        loop_count=len(boundary.loops),
        hole_count=len(boundary.hole_loops),
        area=boundary.area,
        processing_time_ms=round(elapsed, 3),
    )

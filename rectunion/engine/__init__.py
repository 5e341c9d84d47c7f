"""Union-boundary engine: rectangles in, rectilinear loops out."""

from rectunion.engine.config import PipelineConfig
from rectunion.engine.context import UnionContext
from rectunion.engine.errors import (
    DegenerateTopology,
    InvalidInput,
    ResourceLimitExceeded,
    UnionBoundaryError,
)
from rectunion.engine.pipeline import Pipeline, compute_union_boundary, create_pipeline, union_outline
from rectunion.engine.registry import Stage, get_registry, transform
from rectunion.engine.shapes import (
    BoundaryEdge,
    LoopKind,
    PolygonLoop,
    Rectangle,
    UnionBoundary,
    UnionPolygon,
)

__all__ = [
    "transform",
    "Stage",
    "get_registry",
    "UnionContext",
    "Pipeline",
    "PipelineConfig",
    "create_pipeline",
    "compute_union_boundary",
    "union_outline",
    "Rectangle",
    "BoundaryEdge",
    "LoopKind",
    "PolygonLoop",
    "UnionPolygon",
    "UnionBoundary",
    "UnionBoundaryError",
    "InvalidInput",
    "ResourceLimitExceeded",
    "DegenerateTopology",
]

"""rectunion: polygonal boundary of a union of axis-aligned rectangles."""

from rectunion.engine import (
    DegenerateTopology,
    InvalidInput,
    LoopKind,
    PipelineConfig,
    PolygonLoop,
    Rectangle,
    ResourceLimitExceeded,
    UnionBoundary,
    UnionBoundaryError,
    UnionPolygon,
    compute_union_boundary,
    union_outline,
)

__version__ = "0.1.0"

__all__ = [
    "compute_union_boundary",
    "union_outline",
    "PipelineConfig",
    "Rectangle",
    "LoopKind",
    "PolygonLoop",
    "UnionPolygon",
    "UnionBoundary",
    "UnionBoundaryError",
    "InvalidInput",
    "ResourceLimitExceeded",
    "DegenerateTopology",
]

"""Error kinds raised by the union-boundary pipeline.

Every stage fails fast: the first error stops the pipeline and reaches the
caller unchanged, tagged with the id of the stage that raised it.
"""

from __future__ import annotations


class UnionBoundaryError(Exception):
    """Base class for all union-boundary failures."""

    kind = "union_boundary_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.stage: str | None = None


class InvalidInput(UnionBoundaryError, ValueError):
    """A rectangle has non-finite or non-numeric values, or a bad size."""

    kind = "invalid_input"

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class ResourceLimitExceeded(UnionBoundaryError):
    """The compressed grid would exceed the configured cell budget."""

    kind = "resource_limit_exceeded"

    def __init__(self, cells: int, limit: int) -> None:
        super().__init__(
            f"Compressed grid needs {cells} cells, limit is {limit}"
        )
        self.cells = cells
        self.limit = limit


class DegenerateTopology(UnionBoundaryError, RuntimeError):
    """Internal invariant violation while assembling boundary loops."""

    kind = "degenerate_topology"

"""Pipeline orchestrator: runs stages in dependency order, failing fast."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from collections.abc import Iterable
from typing import Any

from rectunion.engine.config import PipelineConfig
from rectunion.engine.context import UnionContext
from rectunion.engine.errors import UnionBoundaryError
from rectunion.engine.registry import Stage, TransformRegistry, TransformSpec, get_registry
from rectunion.engine.shapes import UnionBoundary

logger = logging.getLogger(__name__)

_STAGE_PACKAGES = ["stage0", "stage1", "stage2", "stage3", "stage4"]
_transforms_loaded = False


def load_transforms() -> None:
    """Import all stage modules so @transform decorators fire."""
    global _transforms_loaded
    if _transforms_loaded:
        return
    for stage_name in _STAGE_PACKAGES:
        package = importlib.import_module(f"rectunion.engine.{stage_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")
    _transforms_loaded = True


class Pipeline:
    """Orchestrates the union-boundary stages."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: UnionContext) -> UnionContext:
        """Run every stage enabled by the config on the given context.

        The first UnionBoundaryError stops the run; it is tagged with the
        failing stage id and re-raised.
        """
        start = time.perf_counter()
        ctx.config = self.config

        enabled = self.registry.enabled_for(self.config)
        ordered = self.registry.resolve_order(s.id for s in enabled)

        logger.info(
            "Pipeline: %d stages queued (%d disabled) for %d rectangles",
            len(ordered),
            self.registry.count - len(ordered),
            len(ctx.raw_rectangles),
        )

        for spec in ordered:
            self._run_spec(spec, ctx)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d stages, %d polygons in %.1fms",
            len(ctx.completed_transforms),
            len(ctx.polygons),
            total,
        )
        return ctx

    def run_stage(self, ctx: UnionContext, stage: Stage) -> UnionContext:
        """Run only the enabled transforms of a specific stage."""
        ctx.config = self.config
        for spec in self.registry.get_stage(stage):
            if spec.is_enabled(self.config):
                self._run_spec(spec, ctx)
        return ctx

    def _run_spec(self, spec: TransformSpec, ctx: UnionContext) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
        except UnionBoundaryError as e:
            e.stage = spec.id
            ctx.errors[spec.id] = str(e)
            logger.warning("  %s FAILED: %s", spec.id, e)
            raise
        ctx.completed_transforms.add(spec.id)
        elapsed = (time.perf_counter() - t0) * 1000
        ctx.timings_ms[spec.id] = elapsed
        logger.debug("  %s (%s) completed in %.1fms", spec.id, spec.description, elapsed)


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    load_transforms()
    return Pipeline(config=config)


def compute_union_boundary(
    rectangles: Iterable[Any],
    config: PipelineConfig | None = None,
) -> UnionBoundary:
    """Polygonal boundary of the union of axis-aligned rectangles.

    ``rectangles`` may hold Rectangle instances, mappings with
    x/y/width/height keys, or (x, y, width, height) sequences. An empty input
    gives an empty result. Raises InvalidInput, ResourceLimitExceeded or
    DegenerateTopology; a partial result is never returned.
    """
    ctx = UnionContext(raw_rectangles=list(rectangles))
    create_pipeline(config).run(ctx)
    return ctx.result()


def union_outline(
    rectangles: Iterable[Any],
    config: PipelineConfig | None = None,
) -> list[list[dict[str, float]]]:
    """Every loop of the union as a list of {"x", "y"} points, outers before their holes."""
    boundary = compute_union_boundary(rectangles, config)
    return [loop.to_points() for loop in boundary.loops]

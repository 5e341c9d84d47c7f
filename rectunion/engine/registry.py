"""Stage registry for the union-boundary pipeline.

Each stage is a plain function over UnionContext, registered with
``@transform``. A stage names the stages whose context fields it reads;
a stage that only makes sense under some configuration carries an
``enabled`` predicate over PipelineConfig:

    @transform(id="U4.01", stage=Stage.OUTPUT, dependencies=["U3.02"],
               enabled=lambda config: config.simplify)
    def polygon_simplification(ctx: UnionContext) -> None:
        ...
"""

from __future__ import annotations

import enum
import heapq
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable

if TYPE_CHECKING:
    from rectunion.engine.config import PipelineConfig
    from rectunion.engine.context import UnionContext

logger = logging.getLogger(__name__)


class Stage(enum.IntEnum):
    INPUT = 0
    RASTER = 1
    EDGES = 2
    LOOPS = 3
    OUTPUT = 4


@dataclass
class TransformSpec:
    id: str
    stage: Stage
    fn: Callable[["UnionContext"], None]
    dependencies: list[str] = field(default_factory=list)
    enabled: Callable[["PipelineConfig"], bool] | None = None
    description: str = ""

    def is_enabled(self, config: "PipelineConfig") -> bool:
        """Stages without a predicate always run."""
        return self.enabled is None or bool(self.enabled(config))


class TransformRegistry:
    """Stages keyed by id, ordered by (stage, id) for listing."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.stage.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_stage(self, stage: Stage) -> list[TransformSpec]:
        return [s for s in self.all() if s.stage == stage]

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.stage, s.id))

    def enabled_for(self, config: "PipelineConfig") -> list[TransformSpec]:
        return [s for s in self.all() if s.is_enabled(config)]

    def resolve_order(self, requested_ids: Iterable[str] | None = None) -> list[TransformSpec]:
        """Requested stages plus everything they depend on, dependencies first.

        Ties are broken by id so the order is stable. Raises ValueError on an
        unregistered dependency or a dependency cycle.
        """
        roots = self._transforms.keys() if requested_ids is None else requested_ids
        pool = self._closure(roots)

        dependents: dict[str, list[str]] = defaultdict(list)
        pending = {tid: len(pool[tid].dependencies) for tid in pool}
        for tid, spec in pool.items():
            for dep in spec.dependencies:
                dependents[dep].append(tid)

        ready = [tid for tid, n in pending.items() if n == 0]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            tid = heapq.heappop(ready)
            ordered.append(pool[tid])
            for child in dependents[tid]:
                pending[child] -= 1
                if pending[child] == 0:
                    heapq.heappush(ready, child)

        if len(ordered) != len(pool):
            stuck = sorted(tid for tid, n in pending.items() if n > 0)
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered

    def _closure(self, roots: Iterable[str]) -> dict[str, TransformSpec]:
        pool: dict[str, TransformSpec] = {}
        stack = list(roots)
        while stack:
            tid = stack.pop()
            if tid in pool:
                continue
            if tid not in self._transforms:
                raise ValueError(f"Unknown transform ID: {tid}")
            pool[tid] = self._transforms[tid]
            stack.extend(pool[tid].dependencies)
        return pool

    @property
    def count(self) -> int:
        return len(self._transforms)


_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    stage: Stage,
    dependencies: list[str] | None = None,
    enabled: Callable[["PipelineConfig"], bool] | None = None,
    description: str = "",
):
    """Register the decorated function as a pipeline stage."""

    def decorator(fn: Callable[["UnionContext"], None]):
        _registry.register(
            TransformSpec(
                id=id,
                stage=stage,
                fn=fn,
                dependencies=list(dependencies or []),
                enabled=enabled,
                description=description,
            )
        )
        return fn

    return decorator

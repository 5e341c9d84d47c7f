"""U3.01 — Loop Tracing.

Partition the directed boundary edges into closed loops. At each vertex the
walk takes the rightmost available turn relative to its incoming direction
(right, then straight, then left). With the covered side on the right this
pairs edges by direction at pinch points, where two covered cells touch only
at a corner: each walk wraps around one covered cell instead of running
straight through the vertex.

Uncovered cells meeting at a pinch point still put the same loop through the
vertex twice (a figure-eight); every walk is therefore split at repeated
vertices so the emitted loops are simple.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from rectunion.engine.context import UnionContext
from rectunion.engine.errors import DegenerateTopology
from rectunion.engine.registry import Stage, transform
from rectunion.engine.shapes import BoundaryEdge, GridVertex

logger = logging.getLogger(__name__)

Direction = tuple[int, int]


def turn_preference(incoming: Direction) -> list[Direction]:
    """Outgoing directions from rightmost to leftmost, U-turn excluded.

    On screen (y down) the right-hand side of (dx, dy) is (-dy, dx).
    """
    dx, dy = incoming
    return [(-dy, dx), (dx, dy), (dy, -dx)]


def build_adjacency(edges: list[BoundaryEdge]) -> dict[GridVertex, list[BoundaryEdge]]:
    """Outgoing edges per vertex; checks every vertex is balanced."""
    outgoing: dict[GridVertex, list[BoundaryEdge]] = defaultdict(list)
    balance: dict[GridVertex, int] = defaultdict(int)
    for edge in edges:
        outgoing[edge.start].append(edge)
        balance[edge.start] += 1
        balance[edge.end] -= 1

    unbalanced = sorted(v for v, b in balance.items() if b != 0)
    if unbalanced:
        raise DegenerateTopology(
            f"Boundary vertices with unequal in/out degree: {unbalanced[:5]}"
        )
    return dict(outgoing)


def _next_edge(
    edge: BoundaryEdge,
    outgoing: dict[GridVertex, list[BoundaryEdge]],
    used: set[BoundaryEdge],
) -> BoundaryEdge:
    candidates = {e.direction: e for e in outgoing.get(edge.end, ()) if e not in used}
    for d in turn_preference(edge.direction):
        if d in candidates:
            return candidates[d]
    raise DegenerateTopology(f"Boundary walk stuck at vertex {edge.end}")


def trace_walks(edges: list[BoundaryEdge]) -> list[list[GridVertex]]:
    """Closed walks over all edges, each edge used exactly once.

    Each walk is a vertex list that returns to its first vertex; the first
    vertex is not repeated at the end.
    """
    outgoing = build_adjacency(edges)
    used: set[BoundaryEdge] = set()
    walks: list[list[GridVertex]] = []

    for start in sorted(edges):
        if start in used:
            continue
        used.add(start)
        walk = [start.start]
        edge = start
        while edge.end != start.start:
            walk.append(edge.end)
            edge = _next_edge(edge, outgoing, used)
            used.add(edge)
        walks.append(walk)

    if len(used) != len(edges):
        raise DegenerateTopology(f"{len(edges) - len(used)} boundary edges left unconsumed")
    return walks


def split_simple(walk: list[GridVertex]) -> list[tuple[GridVertex, ...]]:
    """Split a closed walk at repeated vertices into simple loops.

    Traversal direction is preserved, so each piece keeps its orientation.
    """
    pieces: list[tuple[GridVertex, ...]] = []
    stack: list[GridVertex] = []
    position: dict[GridVertex, int] = {}

    for v in walk:
        if v in position:
            k = position[v]
            pieces.append(tuple(stack[k:]))
            for u in stack[k + 1 :]:
                del position[u]
            del stack[k + 1 :]
        else:
            position[v] = len(stack)
            stack.append(v)

    pieces.append(tuple(stack))
    return pieces


@transform(
    id="U3.01",
    stage=Stage.LOOPS,
    dependencies=["U2.01"],
    description="Trace boundary edges into simple closed loops (rightmost-turn rule)",
)
def loop_tracing(ctx: UnionContext) -> None:
    loops: list[tuple[GridVertex, ...]] = []
    walks = trace_walks(ctx.edges)
    for walk in walks:
        loops.extend(split_simple(walk))

    ctx.grid_loops = loops
    logger.debug("Traced %d walks into %d loops", len(walks), len(loops))

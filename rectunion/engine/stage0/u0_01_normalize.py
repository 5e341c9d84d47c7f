"""U0.01 — Rectangle Normalization.

Coerce every input to a Rectangle, reject non-finite or non-numeric values,
and flip negative width/height so every rectangle is anchored at its
top-left corner. Zero-area rectangles cover nothing and are dropped (or
rejected when config.reject_degenerate is set).
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping, Sequence
from typing import Any

from rectunion.engine.context import UnionContext
from rectunion.engine.errors import InvalidInput
from rectunion.engine.registry import Stage, transform
from rectunion.engine.shapes import Rectangle

logger = logging.getLogger(__name__)

# Accepted spellings for the size keys of mapping input
_WIDTH_KEYS = ("width", "w")
_HEIGHT_KEYS = ("height", "h")


def _number(value: Any, name: str, index: int) -> float:
    # bool is an Integral; a flag is never a coordinate
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInput(f"Rectangle {index}: {name}={value!r} is not a number", index=index)
    try:
        return float(value)
    except OverflowError as e:
        raise InvalidInput(f"Rectangle {index}: {name} is out of float range", index=index) from e


def _lookup(item: Mapping[str, Any], keys: tuple[str, ...], index: int) -> Any:
    for key in keys:
        if key in item:
            return item[key]
    raise InvalidInput(f"Rectangle {index}: missing '{keys[0]}'", index=index)


def coerce_rectangle(item: Any, index: int = 0) -> Rectangle:
    """Build a Rectangle from a Rectangle, a mapping, or an (x, y, w, h) sequence."""
    if isinstance(item, Rectangle):
        values = (item.x, item.y, item.width, item.height)
    elif isinstance(item, Mapping):
        values = (
            _lookup(item, ("x",), index),
            _lookup(item, ("y",), index),
            _lookup(item, _WIDTH_KEYS, index),
            _lookup(item, _HEIGHT_KEYS, index),
        )
    elif isinstance(item, Sequence) and not isinstance(item, (str, bytes)) and len(item) == 4:
        values = tuple(item)
    else:
        raise InvalidInput(f"Rectangle {index}: unsupported value {item!r}", index=index)

    names = ("x", "y", "width", "height")
    return Rectangle(*(_number(v, n, index) for v, n in zip(values, names)))


def normalize_rectangle(item: Any, index: int = 0) -> Rectangle:
    """Coerce, validate and normalize a single input rectangle."""
    rect = coerce_rectangle(item, index)
    if not rect.is_finite:
        raise InvalidInput(f"Rectangle {index}: non-finite value in {rect}", index=index)

    norm = rect.normalized()
    if norm.width < 0 or norm.height < 0:
        raise InvalidInput(f"Rectangle {index}: negative size after normalization", index=index)
    # x + width can overflow to inf even when both parts are finite
    _, _, x1, y1 = norm.bounds
    if not (math.isfinite(x1) and math.isfinite(y1)):
        raise InvalidInput(f"Rectangle {index}: far edge overflows", index=index)
    return norm


@transform(
    id="U0.01",
    stage=Stage.INPUT,
    description="Validate input rectangles and normalize negative sizes",
)
def normalize_rectangles(ctx: UnionContext) -> None:
    rectangles: list[Rectangle] = []
    dropped = 0

    for index, item in enumerate(ctx.raw_rectangles):
        rect = normalize_rectangle(item, index)
        if rect.is_degenerate:
            if ctx.config.reject_degenerate:
                raise InvalidInput(f"Rectangle {index}: zero area", index=index)
            dropped += 1
            continue
        rectangles.append(rect)

    ctx.rectangles = rectangles
    ctx.dropped_degenerate = dropped
    if dropped:
        logger.debug("Dropped %d zero-area rectangles", dropped)

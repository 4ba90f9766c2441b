"""Normalization: rescale raw layout output to a canonical footprint."""

from __future__ import annotations

__all__ = ["normalize_positions", "target_size"]

import math
from collections.abc import Mapping

from canvas_layout.layout.constants import (
    NORMALIZED_MIN_SIZE,
    NORMALIZED_SIZE_PER_SQRT_NODE,
)
from canvas_layout.parser.model import Position


def target_size(node_count: int) -> float:
    """Side of the square footprint for ``node_count`` nodes.

    Grows with sqrt(node_count) so denser graphs get proportionally more
    room.
    """
    return max(NORMALIZED_MIN_SIZE, math.sqrt(node_count) * NORMALIZED_SIZE_PER_SQRT_NODE)


def normalize_positions(
    raw: Mapping[str, Position],
    center: Position,
) -> dict[str, Position]:
    """Uniformly scale ``raw`` to the target footprint, centered on ``center``.

    The larger bounding-box side maps onto :func:`target_size`; a
    degenerate (zero) width or height counts as 1 so a single node or a
    collinear set still maps cleanly.
    """
    if not raw:
        return {}

    xs = [p.x for p in raw.values()]
    ys = [p.y for p in raw.values()]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)

    width = (max_x - min_x) or 1.0
    height = (max_y - min_y) or 1.0
    factor = target_size(len(raw)) / max(width, height)

    box_cx = (min_x + max_x) / 2
    box_cy = (min_y + max_y) / 2

    return {
        nid: Position(
            (p.x - box_cx) * factor + center.x,
            (p.y - box_cy) * factor + center.y,
        )
        for nid, p in raw.items()
    }

"""Random layout: uniform scatter in a square centered on the target point.

No collision avoidance; nodes may overlap.
"""

from __future__ import annotations

__all__ = ["random_layout", "default_side"]

import math
import random

import networkx as nx

from canvas_layout.layout.constants import RANDOM_MIN_SIDE, RANDOM_SIDE_PER_SQRT_NODE
from canvas_layout.parser.model import Position


def default_side(node_count: int) -> float:
    return max(RANDOM_MIN_SIDE, math.sqrt(node_count) * RANDOM_SIDE_PER_SQRT_NODE)


def random_layout(
    G: nx.DiGraph,
    center: Position,
    scale: float | None = None,
    rng: random.Random | None = None,
) -> dict[str, Position]:
    n = G.number_of_nodes()
    if n == 0:
        return {}
    if rng is None:
        rng = random.Random()
    side = default_side(n) if scale is None else scale
    left = center.x - side / 2
    top = center.y - side / 2

    return {
        nid: Position(left + side * rng.random(), top + side * rng.random())
        for nid in G.nodes
    }

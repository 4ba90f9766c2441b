"""Circular layout: nodes evenly spaced on a circle, in input order."""

from __future__ import annotations

__all__ = ["circular_layout", "default_radius"]

import math

import networkx as nx

from canvas_layout.layout.constants import CIRCULAR_MIN_RADIUS, CIRCULAR_RADIUS_PER_NODE
from canvas_layout.parser.model import Position


def default_radius(node_count: int) -> float:
    """Radius keeping the circumference proportional to the node count."""
    return max(CIRCULAR_MIN_RADIUS, node_count * CIRCULAR_RADIUS_PER_NODE)


def circular_layout(
    G: nx.DiGraph,
    center: Position,
    scale: float | None = None,
) -> dict[str, Position]:
    """Place node ``i`` of ``n`` at angle ``2*pi*i/n`` on a circle of radius ``scale``."""
    n = G.number_of_nodes()
    if n == 0:
        return {}
    radius = default_radius(n) if scale is None else scale
    step = 2 * math.pi / n

    positions: dict[str, Position] = {}
    for i, nid in enumerate(G.nodes):
        angle = step * i
        positions[nid] = Position(
            center.x + radius * math.cos(angle),
            center.y + radius * math.sin(angle),
        )
    return positions

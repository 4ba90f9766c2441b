"""Grid layout: a near-square grid filled row-major in input order."""

from __future__ import annotations

__all__ = ["grid_layout", "grid_shape"]

import math

import networkx as nx

from canvas_layout.layout.constants import GRID_CELL_SIZE
from canvas_layout.parser.model import Position


def grid_shape(node_count: int) -> tuple[int, int]:
    """Return (columns, rows) for ``node_count`` nodes."""
    if node_count <= 0:
        return 0, 0
    cols = math.ceil(math.sqrt(node_count))
    rows = math.ceil(node_count / cols)
    return cols, rows


def grid_layout(
    G: nx.DiGraph,
    center: Position,
    scale: float | None = None,
) -> dict[str, Position]:
    """Arrange nodes on a grid whose bounding box is centered on ``center``."""
    n = G.number_of_nodes()
    if n == 0:
        return {}
    cell = GRID_CELL_SIZE if scale is None else scale
    cols, rows = grid_shape(n)

    offset_x = (cols - 1) * cell / 2
    offset_y = (rows - 1) * cell / 2

    positions: dict[str, Position] = {}
    for index, nid in enumerate(G.nodes):
        row, col = divmod(index, cols)
        positions[nid] = Position(
            col * cell - offset_x + center.x,
            row * cell - offset_y + center.y,
        )
    return positions

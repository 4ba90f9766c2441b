"""Data model for investigation diagrams and their computed layouts."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


class LayoutAlgorithm(Enum):
    """Available layout strategies, in menu order."""

    FORCE = "force"
    CIRCULAR = "circular"
    GRID = "grid"
    RANDOM = "random"


@dataclass(frozen=True)
class Position:
    """A point on the canvas."""

    x: float
    y: float

    def distance_to(self, other: Position) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass
class Node:
    """A diagram element.

    ``position`` is None when the element has never been placed; the force
    layout seeds such nodes with a random starting point.
    """

    id: str
    position: Position | None = None


@dataclass
class Edge:
    """A relationship between two elements (stored directed)."""

    source: str
    target: str


@dataclass(frozen=True)
class LayoutOptions:
    """Caller-supplied layout options.

    center: point the layout is centered on. None means the centroid of
        the input positions.
    scale: algorithm-specific size (circle radius, grid cell size, side of
        the random square). None derives it from the node count.
    seed: seed for the random source. None draws from system entropy.
    """

    center: Position | None = None
    scale: float | None = None
    seed: int | None = None


@dataclass
class LayoutResult:
    """Final position of every input node."""

    positions: dict[str, Position] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.positions

    def __getitem__(self, node_id: str) -> Position:
        return self.positions[node_id]

    def __iter__(self):
        return iter(self.positions)

    def bounds(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y); all zero when empty."""
        if not self.positions:
            return 0.0, 0.0, 0.0, 0.0
        xs = [p.x for p in self.positions.values()]
        ys = [p.y for p in self.positions.values()]
        return min(xs), min(ys), max(xs), max(ys)

    def as_dict(self) -> dict[str, dict[str, float]]:
        """JSON-ready mapping of node id -> {"x", "y"}."""
        return {nid: {"x": p.x, "y": p.y} for nid, p in self.positions.items()}

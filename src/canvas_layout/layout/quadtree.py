"""Barnes-Hut quad-tree for approximate pairwise repulsion.

Each cell stores the total mass and the mass-weighted centroid of the
bodies below it. A distant cell (``size / distance < theta``) is treated
as a single body, which brings repulsion down from O(n^2) to roughly
O(n log n) per iteration.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

# Coincident bodies would otherwise split forever.
MAX_DEPTH = 24


class QuadTree:
    """A square region holding either one body, or four child quadrants."""

    __slots__ = (
        "cx", "cy", "half", "mass", "mass_x", "mass_y",
        "body", "children", "depth",
    )

    def __init__(self, cx: float, cy: float, half: float, depth: int = 0) -> None:
        self.cx = cx
        self.cy = cy
        self.half = half
        self.depth = depth
        self.mass = 0.0
        self.mass_x = 0.0
        self.mass_y = 0.0
        self.body: int | None = None
        self.children: list[QuadTree] | None = None

    @classmethod
    def build(
        cls,
        xs: Sequence[float],
        ys: Sequence[float],
        masses: Sequence[float],
    ) -> QuadTree:
        """Build a tree covering every body."""
        min_x, max_x = min(xs), max(xs)
        min_y, max_y = min(ys), max(ys)
        half = max(max_x - min_x, max_y - min_y) / 2 or 1.0
        tree = cls((min_x + max_x) / 2, (min_y + max_y) / 2, half * 1.0001)
        for i in range(len(xs)):
            tree.insert(i, xs, ys, masses)
        return tree

    @property
    def size(self) -> float:
        return self.half * 2

    def _quadrant(self, x: float, y: float) -> int:
        return (1 if x >= self.cx else 0) + (2 if y >= self.cy else 0)

    def _subdivide(self) -> None:
        q = self.half / 2
        d = self.depth + 1
        self.children = [
            QuadTree(self.cx - q, self.cy - q, q, d),
            QuadTree(self.cx + q, self.cy - q, q, d),
            QuadTree(self.cx - q, self.cy + q, q, d),
            QuadTree(self.cx + q, self.cy + q, q, d),
        ]

    def insert(
        self,
        i: int,
        xs: Sequence[float],
        ys: Sequence[float],
        masses: Sequence[float],
    ) -> None:
        x, y, m = xs[i], ys[i], masses[i]
        was_empty = self.mass == 0.0
        total = self.mass + m
        self.mass_x = (self.mass_x * self.mass + x * m) / total
        self.mass_y = (self.mass_y * self.mass + y * m) / total
        self.mass = total

        if self.children is None:
            if was_empty:
                self.body = i
                return
            if self.depth >= MAX_DEPTH:
                # Leaf keeps aggregating; individual bodies are no longer
                # addressable below this depth.
                return
            self._subdivide()
            if self.body is not None:
                prev = self.body
                self.body = None
                self.children[self._quadrant(xs[prev], ys[prev])].insert(
                    prev, xs, ys, masses
                )

        self.children[self._quadrant(x, y)].insert(i, xs, ys, masses)

    def repulsion(
        self,
        i: int,
        xs: Sequence[float],
        ys: Sequence[float],
        masses: Sequence[float],
        coefficient: float,
        theta: float,
    ) -> tuple[float, float]:
        """Total repulsive force on body ``i`` from every other body."""
        fx = 0.0
        fy = 0.0
        x, y, m = xs[i], ys[i], masses[i]
        stack: list[QuadTree] = [self]
        while stack:
            cell = stack.pop()
            if cell.mass == 0.0:
                continue
            if cell.children is None:
                if cell.body == i:
                    continue
                dx = x - cell.mass_x
                dy = y - cell.mass_y
                dist2 = dx * dx + dy * dy
                if dist2 > 0:
                    factor = coefficient * m * cell.mass / dist2
                    fx += dx * factor
                    fy += dy * factor
                continue

            dx = x - cell.mass_x
            dy = y - cell.mass_y
            dist = math.sqrt(dx * dx + dy * dy)
            if dist > 0 and cell.size / dist < theta and not cell._contains(x, y):
                factor = coefficient * m * cell.mass / (dist * dist)
                fx += dx * factor
                fy += dy * factor
            else:
                stack.extend(cell.children)
        return fx, fy

    def _contains(self, x: float, y: float) -> bool:
        return abs(x - self.cx) <= self.half and abs(y - self.cy) <= self.half

"""Overlap resolution: push apart nodes closer than a minimum distance.

Runs a fixed number of all-pairs passes. Each pass is O(n^2), plus an O(n)
recount for every close pair it moves, which is fine for the hundreds of
nodes an investigation diagram holds.
"""

from __future__ import annotations

__all__ = ["resolve_overlaps", "count_overlaps", "overlap_fraction"]

import math
import random
from collections.abc import Mapping

from canvas_layout.layout.constants import MIN_NODE_DISTANCE, OVERLAP_PASSES, PUSH_MARGIN
from canvas_layout.parser.model import Position


def resolve_overlaps(
    positions: Mapping[str, Position],
    min_distance: float = MIN_NODE_DISTANCE,
    passes: int = OVERLAP_PASSES,
    rng: random.Random | None = None,
) -> dict[str, Position]:
    """Return new positions with close pairs pushed apart.

    Pairs are visited in input order. For every unordered pair closer than
    ``min_distance``, both nodes move away from each other along the
    connecting line by half the deficit. Coincident nodes cannot be pushed
    along a line, so the second one is displaced by a random offset of up
    to ``min_distance`` on each axis.

    A move is kept only when it does not raise the number of close pairs
    involving the two moved nodes, so the total number of close pairs
    never grows from one pass to the next. Separation is best effort:
    pairs may remain close when the pass budget runs out.
    """
    if rng is None:
        rng = random.Random()
    ids = list(positions)
    xs = [positions[nid].x for nid in ids]
    ys = [positions[nid].y for nid in ids]

    for _ in range(passes):
        _overlap_pass(xs, ys, min_distance, rng)

    return {nid: Position(xs[i], ys[i]) for i, nid in enumerate(ids)}


def _overlap_pass(
    xs: list[float],
    ys: list[float],
    min_distance: float,
    rng: random.Random,
) -> None:
    # Pushed pairs land just past the threshold so rounding cannot leave
    # them a hair short of it.
    target = min_distance * (1 + PUSH_MARGIN)
    n = len(xs)
    for i in range(n):
        for j in range(i + 1, n):
            dx = xs[j] - xs[i]
            dy = ys[j] - ys[i]
            dist = math.hypot(dx, dy)
            if dist >= min_distance:
                continue

            before = _close_pairs(xs, ys, i, j, min_distance)
            saved = (xs[i], ys[i], xs[j], ys[j])
            if dist > 0:
                push = (target - dist) / 2 / dist
                xs[i] -= dx * push
                ys[i] -= dy * push
                xs[j] += dx * push
                ys[j] += dy * push
            else:
                xs[j] += min_distance * rng.random()
                ys[j] += min_distance * rng.random()

            if _close_pairs(xs, ys, i, j, min_distance) > before:
                xs[i], ys[i], xs[j], ys[j] = saved


def _close_pairs(
    xs: list[float],
    ys: list[float],
    i: int,
    j: int,
    min_distance: float,
) -> int:
    """Count close pairs that involve node ``i`` or node ``j``."""
    count = 0
    for k in range(len(xs)):
        if k != i and math.hypot(xs[k] - xs[i], ys[k] - ys[i]) < min_distance:
            count += 1
        if k != i and k != j and math.hypot(xs[k] - xs[j], ys[k] - ys[j]) < min_distance:
            count += 1
    return count


def count_overlaps(
    positions: Mapping[str, Position],
    min_distance: float = MIN_NODE_DISTANCE,
) -> int:
    """Number of unordered node pairs closer than ``min_distance``."""
    points = [(p.x, p.y) for p in positions.values()]
    count = 0
    for i, (x1, y1) in enumerate(points):
        for x2, y2 in points[i + 1:]:
            if math.hypot(x2 - x1, y2 - y1) < min_distance:
                count += 1
    return count


def overlap_fraction(
    positions: Mapping[str, Position],
    min_distance: float = MIN_NODE_DISTANCE,
) -> float:
    """Share of unordered node pairs closer than ``min_distance``."""
    n = len(positions)
    pairs = n * (n - 1) // 2
    if pairs == 0:
        return 0.0
    return count_overlaps(positions, min_distance) / pairs

"""Force-directed layout (ForceAtlas2).

Connected elements cluster, unconnected ones drift apart:

- every pair of nodes repels, proportionally to the product of their
  masses (1 + degree), with a Barnes-Hut quad-tree above a node count
  threshold;
- every edge attracts its endpoints, with log(1 + d) attraction in
  lin-log mode so hubs do not swallow their neighbourhood;
- gravity pulls every node toward the origin.

Forces are applied with ForceAtlas2's per-node adaptive speed and a global
slow-down factor. The iteration count is the only stopping criterion.
Afterwards overlap resolution separates nodes that are still too close and
the result is normalized onto the requested center.
"""

from __future__ import annotations

__all__ = ["ForceSettings", "force_layout"]

import logging
import math
import random
from collections.abc import Callable
from dataclasses import dataclass

import networkx as nx

from canvas_layout.layout.constants import (
    BARNES_HUT_THETA,
    BARNES_HUT_THRESHOLD,
    FORCE_ITERATIONS,
    GRAVITY,
    INITIAL_SPREAD,
    LIN_LOG,
    MIN_NODE_DISTANCE,
    OVERLAP_PASSES,
    SCALING_RATIO,
    SLOW_DOWN,
    SPEED_FACTOR,
)
from canvas_layout.layout.graph import node_position
from canvas_layout.layout.normalize import normalize_positions
from canvas_layout.layout.overlap import resolve_overlaps
from canvas_layout.layout.quadtree import QuadTree
from canvas_layout.parser.model import Position

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]


@dataclass(frozen=True)
class ForceSettings:
    """Tuning knobs of the force simulation and the overlap pass."""

    iterations: int = FORCE_ITERATIONS
    gravity: float = GRAVITY
    scaling_ratio: float = SCALING_RATIO
    slow_down: float = SLOW_DOWN
    lin_log: bool = LIN_LOG
    barnes_hut_threshold: int = BARNES_HUT_THRESHOLD
    barnes_hut_theta: float = BARNES_HUT_THETA
    min_distance: float = MIN_NODE_DISTANCE
    overlap_passes: int = OVERLAP_PASSES

    def uses_barnes_hut(self, node_count: int) -> bool:
        return node_count > self.barnes_hut_threshold


def force_layout(
    G: nx.DiGraph,
    center: Position,
    settings: ForceSettings | None = None,
    rng: random.Random | None = None,
    progress: ProgressCallback | None = None,
) -> dict[str, Position]:
    """Compute a force-directed layout centered on ``center``."""
    if settings is None:
        settings = ForceSettings()
    if rng is None:
        rng = random.Random()

    ids = list(G.nodes)
    if not ids:
        return {}

    xs, ys = _initial_positions(G, ids, rng)

    if progress:
        progress(20, "forces")
    _relax(G, ids, xs, ys, settings)

    if progress:
        progress(60, "overlap removal")
    raw = {nid: Position(xs[i], ys[i]) for i, nid in enumerate(ids)}
    raw = resolve_overlaps(
        raw,
        min_distance=settings.min_distance,
        passes=settings.overlap_passes,
        rng=rng,
    )

    if progress:
        progress(90, "normalization")
    return normalize_positions(raw, center)


def _initial_positions(
    G: nx.DiGraph, ids: list[str], rng: random.Random
) -> tuple[list[float], list[float]]:
    """Starting coordinates; unplaced nodes get a random point."""
    xs: list[float] = []
    ys: list[float] = []
    for nid in ids:
        pos = node_position(G, nid)
        if pos is None:
            xs.append(rng.uniform(-INITIAL_SPREAD, INITIAL_SPREAD))
            ys.append(rng.uniform(-INITIAL_SPREAD, INITIAL_SPREAD))
        else:
            xs.append(pos.x)
            ys.append(pos.y)
    return xs, ys


def _relax(
    G: nx.DiGraph,
    ids: list[str],
    xs: list[float],
    ys: list[float],
    settings: ForceSettings,
) -> None:
    """Run the ForceAtlas2 iterations, updating ``xs``/``ys`` in place."""
    n = len(ids)
    index = {nid: i for i, nid in enumerate(ids)}
    masses = [1.0 + G.degree(nid) for nid in ids]
    edges = [(index[u], index[v]) for u, v in G.edges if u != v]
    use_barnes_hut = settings.uses_barnes_hut(n)

    logger.debug(
        "ForceAtlas2: %d nodes, %d edges, %d iterations, barnes_hut=%s",
        n, len(edges), settings.iterations, use_barnes_hut,
    )

    fx = [0.0] * n
    fy = [0.0] * n
    for _ in range(settings.iterations):
        old_fx, old_fy = fx, fy
        fx = [0.0] * n
        fy = [0.0] * n

        if use_barnes_hut:
            _repulsion_barnes_hut(xs, ys, masses, fx, fy, settings)
        else:
            _repulsion_exact(xs, ys, masses, fx, fy, settings.scaling_ratio)
        _gravity(xs, ys, masses, fx, fy, settings.gravity)
        _attraction(xs, ys, edges, fx, fy, settings.lin_log)
        _apply(xs, ys, masses, fx, fy, old_fx, old_fy, settings.slow_down)


def _repulsion_exact(
    xs: list[float],
    ys: list[float],
    masses: list[float],
    fx: list[float],
    fy: list[float],
    coefficient: float,
) -> None:
    n = len(xs)
    for i in range(n):
        xi, yi, mi = xs[i], ys[i], masses[i]
        for j in range(i + 1, n):
            dx = xi - xs[j]
            dy = yi - ys[j]
            dist2 = dx * dx + dy * dy
            if dist2 > 0:
                factor = coefficient * mi * masses[j] / dist2
                fx[i] += dx * factor
                fy[i] += dy * factor
                fx[j] -= dx * factor
                fy[j] -= dy * factor


def _repulsion_barnes_hut(
    xs: list[float],
    ys: list[float],
    masses: list[float],
    fx: list[float],
    fy: list[float],
    settings: ForceSettings,
) -> None:
    tree = QuadTree.build(xs, ys, masses)
    for i in range(len(xs)):
        rx, ry = tree.repulsion(
            i, xs, ys, masses, settings.scaling_ratio, settings.barnes_hut_theta
        )
        fx[i] += rx
        fy[i] += ry


def _gravity(
    xs: list[float],
    ys: list[float],
    masses: list[float],
    fx: list[float],
    fy: list[float],
    gravity: float,
) -> None:
    for i in range(len(xs)):
        dist = math.sqrt(xs[i] * xs[i] + ys[i] * ys[i])
        if dist > 0:
            factor = masses[i] * gravity / dist
            fx[i] -= xs[i] * factor
            fy[i] -= ys[i] * factor


def _attraction(
    xs: list[float],
    ys: list[float],
    edges: list[tuple[int, int]],
    fx: list[float],
    fy: list[float],
    lin_log: bool,
) -> None:
    for s, t in edges:
        dx = xs[s] - xs[t]
        dy = ys[s] - ys[t]
        dist = math.sqrt(dx * dx + dy * dy)
        if dist == 0:
            continue
        factor = -math.log1p(dist) / dist if lin_log else -1.0
        fx[s] += dx * factor
        fy[s] += dy * factor
        fx[t] -= dx * factor
        fy[t] -= dy * factor


def _apply(
    xs: list[float],
    ys: list[float],
    masses: list[float],
    fx: list[float],
    fy: list[float],
    old_fx: list[float],
    old_fy: list[float],
    slow_down: float,
) -> None:
    """Move each node with its adaptive speed.

    Swinging (force changing direction between iterations) slows a node
    down, traction (force keeping its direction) speeds it up.
    """
    for i in range(len(xs)):
        dx, dy = fx[i], fy[i]
        if not (math.isfinite(dx) and math.isfinite(dy)):
            fx[i] = fy[i] = 0.0
            continue
        swinging = masses[i] * math.hypot(old_fx[i] - dx, old_fy[i] - dy)
        traction = math.hypot(old_fx[i] + dx, old_fy[i] + dy) / 2
        speed = SPEED_FACTOR * math.log1p(traction) / (1 + math.sqrt(swinging))
        xs[i] += dx * speed / slow_down
        ys[i] += dy * speed / slow_down

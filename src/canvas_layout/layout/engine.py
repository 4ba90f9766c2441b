"""Layout coordinator: builds the graph, derives defaults, dispatches.

Every call is independent: the graph and the working positions are built
at the start of :func:`compute_layout` and discarded at the end.
"""

from __future__ import annotations

__all__ = ["compute_layout", "describe", "list_algorithms", "resolve_algorithm"]

import logging
import random
from collections.abc import Callable, Iterable, Sequence

from canvas_layout.errors import UnknownAlgorithmError
from canvas_layout.layout.circular import circular_layout
from canvas_layout.layout.force import ForceSettings, force_layout
from canvas_layout.layout.graph import build_graph
from canvas_layout.layout.grid import grid_layout
from canvas_layout.layout.scatter import random_layout
from canvas_layout.parser.model import (
    Edge,
    LayoutAlgorithm,
    LayoutOptions,
    LayoutResult,
    Node,
    Position,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]

ALGORITHM_INFO: dict[LayoutAlgorithm, tuple[str, str]] = {
    LayoutAlgorithm.FORCE: (
        "Force (clusters)",
        "Groups connected elements together and separates clusters",
    ),
    LayoutAlgorithm.CIRCULAR: ("Circular", "Arranges elements on a circle"),
    LayoutAlgorithm.GRID: ("Grid", "Aligns elements on a regular grid"),
    LayoutAlgorithm.RANDOM: ("Scatter", "Scatters elements randomly"),
}


def list_algorithms() -> list[LayoutAlgorithm]:
    """Available algorithms, in menu order."""
    return list(LayoutAlgorithm)


def describe(algorithm: LayoutAlgorithm | str) -> tuple[str, str]:
    """Return (display name, short description) for an algorithm.

    Unknown ids come back as their own name with an empty description.
    """
    try:
        key = LayoutAlgorithm(algorithm)
    except ValueError:
        return str(algorithm), ""
    return ALGORITHM_INFO[key]


def resolve_algorithm(algorithm: LayoutAlgorithm | str) -> LayoutAlgorithm:
    """Coerce an id to a :class:`LayoutAlgorithm`, raising on unknown ids."""
    try:
        return LayoutAlgorithm(algorithm)
    except ValueError:
        raise UnknownAlgorithmError(algorithm) from None


def centroid(nodes: Iterable[Node]) -> Position:
    """Mean position of the placed nodes; the origin when none is placed."""
    placed = [n.position for n in nodes if n.position is not None]
    if not placed:
        return Position(0.0, 0.0)
    return Position(
        sum(p.x for p in placed) / len(placed),
        sum(p.y for p in placed) / len(placed),
    )


def compute_layout(
    algorithm: LayoutAlgorithm | str,
    nodes: Sequence[Node],
    edges: Iterable[Edge] = (),
    options: LayoutOptions | None = None,
    progress: ProgressCallback | None = None,
    force_settings: ForceSettings | None = None,
) -> LayoutResult:
    """Compute a position for every node with the selected algorithm.

    An empty node list yields an empty result for any selector. Otherwise
    an unrecognized selector raises :class:`UnknownAlgorithmError`.
    """
    nodes = list(nodes)
    if not nodes:
        return LayoutResult()

    algo = resolve_algorithm(algorithm)
    if options is None:
        options = LayoutOptions()

    if progress:
        progress(0, "graph")
    G = build_graph(nodes, edges)
    center = options.center if options.center is not None else centroid(nodes)
    rng = random.Random(options.seed)

    logger.debug(
        "Computing %s layout for %d nodes, %d edges around (%.1f, %.1f)",
        algo.value, G.number_of_nodes(), G.number_of_edges(), center.x, center.y,
    )

    if progress:
        progress(10, "layout")
    if algo is LayoutAlgorithm.FORCE:
        positions = force_layout(
            G, center, settings=force_settings, rng=rng, progress=progress
        )
    elif algo is LayoutAlgorithm.CIRCULAR:
        positions = circular_layout(G, center, options.scale)
    elif algo is LayoutAlgorithm.GRID:
        positions = grid_layout(G, center, options.scale)
    else:
        positions = random_layout(G, center, options.scale, rng=rng)

    if progress:
        progress(100, "done")
    return LayoutResult(positions)

"""Graph model builder: turns caller node/edge lists into a layout graph."""

from __future__ import annotations

__all__ = ["build_graph", "node_position"]

import logging
from collections.abc import Iterable

import networkx as nx

from canvas_layout.parser.model import Edge, Node, Position

logger = logging.getLogger(__name__)


def build_graph(nodes: Iterable[Node], edges: Iterable[Edge] = ()) -> nx.DiGraph:
    """Build a fresh graph for a single layout call.

    Node iteration order follows the input order. Each node carries ``x``
    and ``y`` attributes when it has an initial position. Edges with a
    missing endpoint and edges repeating an already-added (source, target)
    pair are dropped silently.
    """
    G = nx.DiGraph()
    for node in nodes:
        if node.id in G:
            logger.debug("Ignoring duplicate node id %r", node.id)
            continue
        if node.position is None:
            G.add_node(node.id)
        else:
            G.add_node(node.id, x=float(node.position.x), y=float(node.position.y))

    for edge in edges:
        if edge.source not in G or edge.target not in G:
            continue
        if G.has_edge(edge.source, edge.target):
            continue
        G.add_edge(edge.source, edge.target)

    return G


def node_position(G: nx.DiGraph, node_id: str) -> Position | None:
    """Initial position of a node, or None when it was never placed."""
    attrs = G.nodes[node_id]
    if "x" not in attrs or "y" not in attrs:
        return None
    return Position(attrs["x"], attrs["y"])

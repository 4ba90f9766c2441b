"""Tests for the force-directed layout, quad-tree, overlap pass and normalization."""

import math
import random
from pathlib import Path

import pytest

from canvas_layout.layout.engine import compute_layout
from canvas_layout.layout.force import ForceSettings, _repulsion_exact, force_layout
from canvas_layout.layout.graph import build_graph
from canvas_layout.layout.normalize import normalize_positions, target_size
from canvas_layout.layout.overlap import (
    count_overlaps,
    overlap_fraction,
    resolve_overlaps,
)
from canvas_layout.layout.quadtree import QuadTree
from canvas_layout.parser.document import read_document
from canvas_layout.parser.model import Edge, LayoutOptions, Node, Position

FIXTURES = Path(__file__).parent / "fixtures" / "documents"

FAST = ForceSettings(iterations=30)


def _random_points(n, side, seed):
    rng = random.Random(seed)
    return {
        f"p{i}": Position(rng.uniform(0, side), rng.uniform(0, side))
        for i in range(n)
    }


# --- Force layout ---


def test_single_node_lands_on_center():
    nodes = [Node("only", Position(500, -300))]
    result = compute_layout(
        "force", nodes, options=LayoutOptions(center=Position(10, 20), seed=1)
    )
    assert result["only"].x == pytest.approx(10)
    assert result["only"].y == pytest.approx(20)


def test_single_node_default_center_is_own_position():
    nodes = [Node("only", Position(-40, 75))]
    result = compute_layout("force", nodes, options=LayoutOptions(seed=1))
    assert result["only"].x == pytest.approx(-40)
    assert result["only"].y == pytest.approx(75)


def test_two_nodes_fill_footprint():
    nodes = [Node("a", Position(0, 0)), Node("b", Position(5, 3))]
    result = compute_layout(
        "force", nodes, [Edge("a", "b")], LayoutOptions(center=Position(0, 0), seed=5)
    )
    assert result["a"].distance_to(result["b"]) >= target_size(2) - 1e-6


def test_same_seed_same_layout():
    doc = read_document(FIXTURES / "two_clusters.json")
    opts = LayoutOptions(seed=11)
    first = compute_layout("force", doc.nodes, doc.edges, opts)
    second = compute_layout("force", doc.nodes, doc.edges, opts)
    assert first == second


def test_same_seed_same_aspect_ratio_for_unplaced_nodes():
    doc = read_document(FIXTURES / "unplaced.json")
    opts = LayoutOptions(seed=21)

    def aspect(result):
        min_x, min_y, max_x, max_y = result.bounds()
        return (max_x - min_x) / max(max_y - min_y, 1.0)

    a = compute_layout("force", doc.nodes, doc.edges, opts)
    b = compute_layout("force", doc.nodes, doc.edges, opts)
    assert aspect(a) == pytest.approx(aspect(b))


def test_connected_clusters_stay_together():
    doc = read_document(FIXTURES / "two_clusters.json")
    result = compute_layout("force", doc.nodes, doc.edges, LayoutOptions(seed=3))
    cluster_a = ["a1", "a2", "a3", "a4"]
    cluster_b = ["b1", "b2", "b3", "b4"]

    def mean_distance(pairs):
        dists = [result[u].distance_to(result[v]) for u, v in pairs]
        return sum(dists) / len(dists)

    intra = [
        (u, v)
        for group in (cluster_a, cluster_b)
        for i, u in enumerate(group)
        for v in group[i + 1:]
    ]
    inter = [(u, v) for u in cluster_a for v in cluster_b]
    assert mean_distance(intra) < mean_distance(inter)


def test_normalized_footprint_size():
    doc = read_document(FIXTURES / "star.json")
    result = compute_layout("force", doc.nodes, doc.edges, LayoutOptions(seed=8))
    min_x, min_y, max_x, max_y = result.bounds()
    assert max(max_x - min_x, max_y - min_y) == pytest.approx(target_size(len(doc.nodes)))


def test_stacked_nodes_are_separated():
    doc = read_document(FIXTURES / "stacked.json")
    result = compute_layout("force", doc.nodes, doc.edges, LayoutOptions(seed=2))
    assert len(result) == 4
    assert all(p.is_finite() for p in result.positions.values())
    points = {(round(p.x, 6), round(p.y, 6)) for p in result.positions.values()}
    assert len(points) == 4


def test_force_layout_empty_graph():
    assert force_layout(build_graph([]), Position(0, 0)) == {}


def test_force_settings_barnes_hut_threshold():
    settings = ForceSettings()
    assert not settings.uses_barnes_hut(100)
    assert settings.uses_barnes_hut(101)


def test_barnes_hut_path_produces_finite_layout():
    n = 150
    nodes = [Node(f"n{i}") for i in range(n)]
    edges = [Edge(f"n{i}", f"n{(i * 7 + 3) % n}") for i in range(n)]
    result = compute_layout(
        "force", nodes, edges, LayoutOptions(seed=4), force_settings=FAST
    )
    assert len(result) == n
    assert all(p.is_finite() for p in result.positions.values())


def test_progress_phases_from_force_layout():
    G = build_graph([Node("a"), Node("b")], [Edge("a", "b")])
    phases = []
    force_layout(
        G, Position(0, 0), settings=FAST, rng=random.Random(0),
        progress=lambda pct, phase: phases.append(phase),
    )
    assert phases == ["forces", "overlap removal", "normalization"]


# --- Quad-tree ---


def test_quadtree_exact_when_theta_zero():
    rng = random.Random(7)
    n = 60
    xs = [rng.uniform(-1000, 1000) for _ in range(n)]
    ys = [rng.uniform(-1000, 1000) for _ in range(n)]
    masses = [1.0 + rng.randint(0, 4) for _ in range(n)]

    fx = [0.0] * n
    fy = [0.0] * n
    _repulsion_exact(xs, ys, masses, fx, fy, 100.0)

    tree = QuadTree.build(xs, ys, masses)
    for i in range(n):
        tx, ty = tree.repulsion(i, xs, ys, masses, 100.0, 0.0)
        assert tx == pytest.approx(fx[i], rel=1e-6, abs=1e-9)
        assert ty == pytest.approx(fy[i], rel=1e-6, abs=1e-9)


def test_quadtree_approximation_close_to_exact():
    rng = random.Random(13)
    n = 300
    xs = [rng.uniform(-2000, 2000) for _ in range(n)]
    ys = [rng.uniform(-2000, 2000) for _ in range(n)]
    masses = [1.0] * n

    fx = [0.0] * n
    fy = [0.0] * n
    _repulsion_exact(xs, ys, masses, fx, fy, 100.0)

    tree = QuadTree.build(xs, ys, masses)
    error = 0.0
    magnitude = 0.0
    for i in range(n):
        tx, ty = tree.repulsion(i, xs, ys, masses, 100.0, 0.5)
        error += math.hypot(tx - fx[i], ty - fy[i])
        magnitude += math.hypot(fx[i], fy[i])
    assert error / magnitude < 0.15


def test_quadtree_total_mass():
    xs = [0.0, 10.0, 10.0]
    ys = [0.0, 0.0, 10.0]
    masses = [1.0, 2.0, 3.0]
    tree = QuadTree.build(xs, ys, masses)
    assert tree.mass == pytest.approx(6.0)
    assert tree.mass_x == pytest.approx((0 + 20 + 30) / 6)
    assert tree.mass_y == pytest.approx(30 / 6)


def test_quadtree_handles_coincident_bodies():
    xs = [5.0, 5.0, 5.0]
    ys = [5.0, 5.0, 5.0]
    tree = QuadTree.build(xs, ys, [1.0, 1.0, 1.0])
    assert tree.mass == pytest.approx(3.0)
    fx, fy = tree.repulsion(0, xs, ys, [1.0, 1.0, 1.0], 100.0, 0.5)
    assert (fx, fy) == (0.0, 0.0)


# --- Overlap resolution ---


def test_overlap_pushes_pair_to_min_distance():
    positions = {"a": Position(0, 0), "b": Position(100, 0)}
    result = resolve_overlaps(positions, min_distance=280, passes=1)
    assert result["a"].distance_to(result["b"]) == pytest.approx(280)
    assert count_overlaps(result, 280) == 0
    assert (result["a"].x + result["b"].x) / 2 == pytest.approx(50)
    assert result["a"].y == pytest.approx(0)


def test_overlap_leaves_distant_pairs():
    positions = {"a": Position(0, 0), "b": Position(500, 0)}
    assert resolve_overlaps(positions, min_distance=280) == positions


def test_overlap_separates_coincident_nodes():
    positions = {"a": Position(3, 3), "b": Position(3, 3)}
    result = resolve_overlaps(positions, rng=random.Random(1))
    assert result["a"] != result["b"]
    assert result["a"].distance_to(result["b"]) > 0


def test_overlap_does_not_mutate_input():
    positions = {"a": Position(0, 0), "b": Position(10, 0)}
    resolve_overlaps(positions)
    assert positions == {"a": Position(0, 0), "b": Position(10, 0)}


@pytest.mark.parametrize("n", [10, 100, 500])
def test_overlap_improves_monotonically(n):
    positions = _random_points(n, side=math.sqrt(n) * 400, seed=n)
    rng = random.Random(n)
    counts = [count_overlaps(positions, 280)]
    for _ in range(5):
        positions = resolve_overlaps(positions, min_distance=280, passes=1, rng=rng)
        counts.append(count_overlaps(positions, 280))
    assert all(b <= a for a, b in zip(counts, counts[1:])), counts
    assert counts[-1] < counts[0] or counts[0] == 0


def test_overlap_rejects_push_into_neighbours():
    # Pushing a-b apart would move a onto c and b onto d.
    positions = {
        "a": Position(0, 0),
        "b": Position(100, 0),
        "c": Position(-300, 0),
        "d": Position(400, 0),
    }
    result = resolve_overlaps(positions, min_distance=280, passes=1)
    assert result == positions
    assert count_overlaps(result, 280) == 1


def test_overlap_fraction():
    positions = {
        "a": Position(0, 0),
        "b": Position(100, 0),
        "c": Position(1000, 0),
    }
    assert count_overlaps(positions, 280) == 1
    assert overlap_fraction(positions, 280) == pytest.approx(1 / 3)
    assert overlap_fraction({"a": Position(0, 0)}) == 0.0


# --- Normalization ---


def test_normalize_empty():
    assert normalize_positions({}, Position(0, 0)) == {}


def test_normalize_single_node_to_center():
    result = normalize_positions({"a": Position(123, -45)}, Position(7, 8))
    assert result == {"a": Position(7.0, 8.0)}


def test_normalize_scales_longest_side():
    raw = {"a": Position(0, 0), "b": Position(10, 0)}
    result = normalize_positions(raw, Position(5, 5))
    assert result["a"].x == pytest.approx(5 - 750)
    assert result["b"].x == pytest.approx(5 + 750)
    assert result["a"].y == pytest.approx(5)


def test_normalize_keeps_aspect_ratio():
    raw = {"a": Position(0, 0), "b": Position(100, 50), "c": Position(40, 10)}
    result = normalize_positions(raw, Position(0, 0))
    width = result["b"].x - result["a"].x
    height = result["b"].y - result["a"].y
    assert width == pytest.approx(target_size(3))
    assert height == pytest.approx(width / 2)


def test_target_size_grows_with_node_count():
    assert target_size(1) == 1500
    assert target_size(36) == 1500
    assert target_size(100) == pytest.approx(2500)

"""Layout constants used across layout modules.

Centralizes the tuning numbers of the force simulation, the overlap pass,
normalization and the deterministic layouts.
"""

# ---------------------------------------------------------------------------
# Force simulation (ForceAtlas2)
# ---------------------------------------------------------------------------
FORCE_ITERATIONS: int = 500
"""Relaxation iterations; the only stopping criterion."""

GRAVITY: float = 8.0
"""Strength of the pull toward the origin."""

SCALING_RATIO: float = 100.0
"""Repulsion coefficient between node pairs."""

SLOW_DOWN: float = 2.0
"""Damping divisor applied to every displacement."""

LIN_LOG: bool = True
"""Use log(1 + d) edge attraction to keep hubs from collapsing clusters."""

BARNES_HUT_THRESHOLD: int = 100
"""Node count above which repulsion uses the quad-tree approximation."""

BARNES_HUT_THETA: float = 0.5
"""Opening criterion: a cell is approximated when size / distance < theta."""

SPEED_FACTOR: float = 0.1
"""Base of the per-node adaptive speed (swinging/traction)."""

INITIAL_SPREAD: float = 500.0
"""Half side of the square unplaced nodes are seeded in."""

# ---------------------------------------------------------------------------
# Overlap resolution
# ---------------------------------------------------------------------------
MIN_NODE_DISTANCE: float = 280.0
"""Minimum center-to-center distance between rendered nodes.

Nodes render about 200px wide by 80px tall, so 280px keeps neighbouring
cards clear of each other with room for edge labels.
"""

OVERLAP_PASSES: int = 5
"""Number of all-pairs correction passes."""

PUSH_MARGIN: float = 1e-9
"""Relative overshoot past MIN_NODE_DISTANCE when pushing a pair apart."""

# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------
NORMALIZED_MIN_SIZE: float = 1500.0
"""Lower bound on the side of the normalized footprint."""

NORMALIZED_SIZE_PER_SQRT_NODE: float = 250.0
"""Footprint growth per sqrt(node count)."""

# ---------------------------------------------------------------------------
# Deterministic layouts
# ---------------------------------------------------------------------------
CIRCULAR_MIN_RADIUS: float = 300.0
"""Smallest circle radius."""

CIRCULAR_RADIUS_PER_NODE: float = 50.0
"""Radius growth per node so the circumference keeps up with node count."""

GRID_CELL_SIZE: float = 120.0
"""Default distance between neighbouring grid cells."""

RANDOM_MIN_SIDE: float = 400.0
"""Smallest side of the random scatter square."""

RANDOM_SIDE_PER_SQRT_NODE: float = 100.0
"""Scatter square growth per sqrt(node count)."""

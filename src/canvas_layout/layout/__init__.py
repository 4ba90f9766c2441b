"""Layout engine: graph builder, algorithms and coordinator."""

from canvas_layout.layout.engine import compute_layout, describe, list_algorithms
from canvas_layout.layout.force import ForceSettings

__all__ = ["compute_layout", "describe", "list_algorithms", "ForceSettings"]

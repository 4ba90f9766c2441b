"""canvas-layout: automatic 2D layouts for investigation diagrams."""

__version__ = "0.1.0"

from canvas_layout.errors import (  # noqa: E402
    DocumentError,
    LayoutError,
    UnknownAlgorithmError,
)
from canvas_layout.layout import (  # noqa: E402
    ForceSettings,
    compute_layout,
    describe,
    list_algorithms,
)
from canvas_layout.parser import (  # noqa: E402
    Edge,
    LayoutAlgorithm,
    LayoutOptions,
    LayoutResult,
    Node,
    Position,
    parse_document,
    read_document,
)
from canvas_layout.worker import LayoutWorker  # noqa: E402

__all__ = [
    "__version__",
    "compute_layout",
    "describe",
    "list_algorithms",
    "ForceSettings",
    "LayoutWorker",
    "Edge",
    "LayoutAlgorithm",
    "LayoutOptions",
    "LayoutResult",
    "Node",
    "Position",
    "parse_document",
    "read_document",
    "DocumentError",
    "LayoutError",
    "UnknownAlgorithmError",
]

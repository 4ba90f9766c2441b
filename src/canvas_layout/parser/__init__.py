"""Data model and input document loading."""

from canvas_layout.parser.document import Document, parse_document, read_document
from canvas_layout.parser.model import (
    Edge,
    LayoutAlgorithm,
    LayoutOptions,
    LayoutResult,
    Node,
    Position,
)

__all__ = [
    "Document",
    "parse_document",
    "read_document",
    "Edge",
    "LayoutAlgorithm",
    "LayoutOptions",
    "LayoutResult",
    "Node",
    "Position",
]

"""Loader for investigation documents (JSON elements and links).

Expected shape::

    {
      "elements": [{"id": "a", "position": {"x": 0, "y": 0}}, ...],
      "links": [{"fromId": "a", "toId": "b"}, ...]
    }

Group elements (``"isGroup": true``) are containers rather than diagram
nodes and are left out of the layout. Elements without a position are
loaded with ``position=None``.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from canvas_layout.errors import DocumentError
from canvas_layout.parser.model import Edge, Node, Position


@dataclass
class Document:
    """Nodes and edges read from an investigation document."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    skipped_groups: int = 0


def read_document(path: Path) -> Document:
    """Read and parse a document file."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentError(f"{path} is not UTF-8 text: {e}") from e
    except OSError as e:
        raise DocumentError(f"Cannot read {path}: {e.strerror or e}") from e
    return parse_document(text)


def parse_document(text: str) -> Document:
    """Parse a JSON investigation document."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DocumentError(
            "Expected a JSON object with 'elements' and 'links' arrays"
        )

    elements = data.get("elements", [])
    links = data.get("links", [])
    if not isinstance(elements, list):
        raise DocumentError("'elements' must be an array")
    if not isinstance(links, list):
        raise DocumentError("'links' must be an array")

    doc = Document()
    for i, element in enumerate(elements):
        if not isinstance(element, dict):
            raise DocumentError(f"Element #{i} is not an object")
        if element.get("isGroup"):
            doc.skipped_groups += 1
            continue
        doc.nodes.append(
            Node(
                id=_require_id(element, "id", f"Element #{i}"),
                position=_parse_position(element.get("position"), i),
            )
        )

    for i, link in enumerate(links):
        if not isinstance(link, dict):
            raise DocumentError(f"Link #{i} is not an object")
        doc.edges.append(
            Edge(
                source=_require_id(link, "fromId", f"Link #{i}"),
                target=_require_id(link, "toId", f"Link #{i}"),
            )
        )

    return doc


def _require_id(obj: dict[str, Any], key: str, where: str) -> str:
    value = obj.get(key)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise DocumentError(f"{where} needs a string '{key}'")
    return str(value)


def _parse_position(value: Any, index: int) -> Position | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise DocumentError(f"Element #{index} has a malformed 'position'")
    x, y = value.get("x"), value.get("y")
    for coord in (x, y):
        if isinstance(coord, bool) or not isinstance(coord, (int, float)):
            raise DocumentError(
                f"Element #{index} position needs numeric 'x' and 'y'"
            )
        if not math.isfinite(coord):
            raise DocumentError(f"Element #{index} position is not finite")
    return Position(float(x), float(y))

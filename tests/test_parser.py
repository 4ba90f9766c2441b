"""Tests for the investigation document loader."""

from pathlib import Path

import pytest

from canvas_layout.errors import DocumentError
from canvas_layout.parser.document import parse_document, read_document
from canvas_layout.parser.model import Edge, Position

FIXTURES = Path(__file__).parent / "fixtures" / "documents"


def test_parse_elements_and_links():
    doc = parse_document(
        '{"elements": [{"id": "a", "position": {"x": 1, "y": 2}}, {"id": "b"}],'
        ' "links": [{"fromId": "a", "toId": "b"}]}'
    )
    assert [n.id for n in doc.nodes] == ["a", "b"]
    assert doc.nodes[0].position == Position(1.0, 2.0)
    assert doc.nodes[1].position is None
    assert doc.edges == [Edge("a", "b")]


def test_group_elements_skipped():
    doc = read_document(FIXTURES / "two_clusters.json")
    assert "case" not in {n.id for n in doc.nodes}
    assert doc.skipped_groups == 1
    assert len(doc.nodes) == 8


def test_links_kept_verbatim():
    """Dangling and duplicate links are the graph builder's concern."""
    doc = read_document(FIXTURES / "stacked.json")
    assert len(doc.edges) == 5


def test_missing_sections_default_empty():
    doc = parse_document("{}")
    assert doc.nodes == []
    assert doc.edges == []


def test_numeric_ids_coerced():
    doc = parse_document('{"elements": [{"id": 7}], "links": []}')
    assert doc.nodes[0].id == "7"


@pytest.mark.parametrize(
    "text, message",
    [
        ("not json", "Invalid JSON"),
        ("[]", "JSON object"),
        ('{"elements": {}}', "'elements' must be an array"),
        ('{"links": 3}', "'links' must be an array"),
        ('{"elements": [1]}', "Element #0 is not an object"),
        ('{"elements": [{"label": "x"}]}', "needs a string 'id'"),
        ('{"elements": [{"id": "a", "position": [1, 2]}]}', "malformed 'position'"),
        ('{"elements": [{"id": "a", "position": {"x": "1", "y": 2}}]}', "numeric"),
        ('{"elements": [{"id": "a", "position": {"x": NaN, "y": 2}}]}', "not finite"),
        ('{"links": [{"fromId": "a"}]}', "needs a string 'toId'"),
        ('{"links": ["a-b"]}', "Link #0 is not an object"),
    ],
)
def test_malformed_documents(text, message):
    with pytest.raises(DocumentError, match=message):
        parse_document(text)


def test_document_error_is_value_error():
    with pytest.raises(ValueError):
        parse_document("[1, 2]")


def test_read_document_not_utf8(tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b'{"elements": ["\xff"]}')
    with pytest.raises(DocumentError, match="not UTF-8"):
        read_document(path)


def test_read_document_unreadable(tmp_path):
    with pytest.raises(DocumentError, match="Cannot read"):
        read_document(tmp_path)

"""Tests for document tree values."""

import pytest
from pydantic import ValidationError as PydanticValidationError

pytestmark = pytest.mark.unit

from contentomatic.tree.nodes import Node, Value, is_node
from tests.conftest import block, paragraph, text


class TestNodeJson:
    """Tests for converting nodes to and from JSON."""

    def test_from_json_builds_subtree(self):
        """Test that nested children become nodes."""
        node = Node.from_json(block("paragraph", nodes=[text("Hello", ["bold"])]))
        assert node.kind == "block"
        assert node.type == "paragraph"
        assert len(node.nodes) == 1
        assert node.nodes[0].kind == "text"
        assert node.nodes[0].text == "Hello"
        assert node.nodes[0].marks[0].type == "bold"

    def test_to_json_round_trip(self):
        """Test that to_json reproduces the JSON the node was built from."""
        obj = block("ordered-list", {"start": 3}, [block("list-item", nodes=[text("one")])])
        assert Node.from_json(obj).to_json() == obj

    def test_shallow_to_json_empties_children(self):
        """Test that include_nodes=False leaves an empty child list."""
        node = Node.from_json(paragraph("Hello"))
        assert node.to_json(include_nodes=False) == {
            "object": "block",
            "type": "paragraph",
            "data": {},
            "nodes": [],
        }

    def test_container_defaults(self):
        """Test that containers get an empty child list and data mapping."""
        node = Node.from_json({"object": "block", "type": "image"})
        assert node.nodes == ()
        assert node.data == {}
        assert not node.is_leaf

    def test_text_node_is_leaf(self):
        """Test that text nodes have no children."""
        node = Node.from_json(text("plain"))
        assert node.is_leaf
        assert node.to_json() == {"object": "text", "text": "plain", "marks": []}

    def test_block_requires_type(self):
        """Test that blocks without a type are rejected."""
        with pytest.raises(PydanticValidationError):
            Node.from_json({"object": "block", "data": {}})

    def test_unknown_kind_rejected(self):
        """Test that unknown node kinds are rejected."""
        with pytest.raises(PydanticValidationError):
            Node.from_json({"object": "widget", "type": "x"})


class TestNodeUpdates:
    """Tests for immutable node updates."""

    def test_nodes_are_frozen(self):
        """Test that node attributes cannot be reassigned."""
        node = Node.from_json(paragraph("Hello"))
        with pytest.raises(PydanticValidationError):
            node.type = "caption"

    def test_with_nodes_returns_new_node(self):
        """Test that with_nodes leaves the original untouched."""
        node = Node.from_json(paragraph("Hello"))
        updated = node.with_nodes([Node.from_json(text("Bye"))])
        assert updated.nodes[0].text == "Bye"
        assert node.nodes[0].text == "Hello"

    def test_with_data_returns_new_node(self):
        """Test that with_data leaves the original untouched."""
        node = Node.from_json(block("image", {"align": "left"}))
        updated = node.with_data({"align": "right"})
        assert updated.data == {"align": "right"}
        assert node.data == {"align": "left"}

    def test_is_node(self):
        """Test node detection."""
        assert is_node(Node.from_json(paragraph("x")))
        assert not is_node(paragraph("x"))


class TestValue:
    """Tests for the document value wrapper."""

    def test_from_json_with_document_node(self):
        """Test building a value from a full document node."""
        value = Value.from_json(
            {"document": {"object": "document", "data": {}, "nodes": [paragraph("Hi")]}}
        )
        assert value.document.kind == "document"
        assert value.document.nodes[0].type == "paragraph"

    def test_from_json_with_node_list(self):
        """Test building a value from a bare list of top-level nodes."""
        value = Value.from_json({"document": [paragraph("Hi"), paragraph("There")]})
        assert [node.type for node in value.document.nodes] == ["paragraph", "paragraph"]

    def test_document_must_be_document_node(self):
        """Test that a block cannot be the root of a value."""
        with pytest.raises(PydanticValidationError):
            Value(document=Node.from_json(paragraph("Hi")))

    def test_to_json(self):
        """Test converting a value to JSON."""
        value = Value.from_json({"document": [paragraph("Hi")]})
        assert value.to_json() == {
            "document": {"object": "document", "data": {}, "nodes": [paragraph("Hi")]}
        }

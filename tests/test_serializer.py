"""Tests for serializing documents into mutation batches."""

import pytest

pytestmark = pytest.mark.unit

from contentomatic.blocks import Block, BlockRegistry, SerializeResult
from contentomatic.exceptions import ConfigurationError
from contentomatic.services.content.serializer import ContentSerializer, serialize_value
from contentomatic.tree.nodes import Node, Value
from tests.conftest import block, paragraph, text

FILE = {"filename": "cat.png", "publicUrl": "http://x/cat.png"}


class StubImageBlock(Block):
    """Creates one record per image node."""

    type = "image"
    path = "images"

    def serialize(self, value, node):
        return SerializeResult(
            node={"object": "block", "type": "image", "data": {}},
            mutations={"create": dict(node.data)},
        )


class GalleryBlock(Block):
    """Creates one record per file and connects existing ones."""

    type = "gallery"
    path = "galleries"

    def serialize(self, value, node):
        return SerializeResult(
            node={"object": "block", "type": "gallery", "data": {"title": node.data.get("title")}},
            mutations={
                "create": [{"file": file} for file in node.data.get("files", [])],
                "connect": [{"id": join_id} for join_id in node.data.get("existing", [])],
            },
        )


def document(*nodes):
    return Value.from_json({"document": list(nodes)})


class TestSerialize:
    """Tests for ContentSerializer.serialize()."""

    def test_image_scenario(self):
        """Test serializing a single image block."""
        value = document(
            {"object": "block", "type": "image", "data": {"file": FILE, "align": "center"}}
        )

        result = serialize_value(value, {"image": StubImageBlock()})

        assert result["document"]["nodes"] == [
            {"object": "block", "type": "image", "data": {"_mutationPaths": ["images.create[0]"]}}
        ]
        assert result["images"] == {
            "disconnectAll": True,
            "create": [{"file": FILE, "align": "center"}],
        }
        assert set(result) == {"document", "images"}

    def test_positional_paths(self):
        """Test that a node's paths follow the order its mutations were emitted."""
        value = document(block("gallery", {"files": ["a", "b"], "existing": ["x"]}))

        result = serialize_value(value, {"gallery": GalleryBlock()})

        node = result["document"]["nodes"][0]
        assert node["data"] == {
            "title": None,
            "_mutationPaths": ["galleries.create[0]", "galleries.create[1]", "galleries.connect[0]"],
        }
        assert result["galleries"] == {
            "disconnectAll": True,
            "create": [{"file": "a"}, {"file": "b"}],
            "connect": [{"id": "x"}],
        }

    def test_batches_accumulate_across_nodes(self):
        """Test that the same handler appends to one batch across the document."""
        value = document(
            block("image", {"file": "1"}),
            paragraph("between"),
            block("image", {"file": "2"}),
        )

        result = serialize_value(value, {"image": StubImageBlock()})

        paths = [
            node["data"]["_mutationPaths"]
            for node in result["document"]["nodes"]
            if node["type"] == "image"
        ]
        assert paths == [["images.create[0]"], ["images.create[1]"]]
        assert result["images"]["create"] == [{"file": "1"}, {"file": "2"}]

    def test_mutation_paths_unique(self):
        """Test that no two nodes share a mutation path."""
        value = document(
            block("image", {"file": "1"}),
            block("gallery", {"files": ["a", "b"], "existing": ["x", "y"]}),
            block("image", {"file": "2"}),
            block("gallery", {"files": ["c"]}),
        )

        result = serialize_value(value, {"image": StubImageBlock(), "gallery": GalleryBlock()})

        all_paths = [
            path
            for node in result["document"]["nodes"]
            for path in node["data"]["_mutationPaths"]
        ]
        assert len(all_paths) == 7
        assert len(set(all_paths)) == len(all_paths)

    def test_untouched_path_has_no_batch(self):
        """Test that handlers whose blocks are absent add no batch."""
        value = document(block("image", {"file": "1"}))

        result = serialize_value(value, {"image": StubImageBlock(), "gallery": GalleryBlock()})

        assert "galleries" not in result

    def test_handler_without_mutations_adds_no_batch(self):
        """Test that a node with no mutations leaves the batches alone."""
        value = document(block("gallery", {"title": "Empty"}))

        result = serialize_value(value, {"gallery": GalleryBlock()})

        assert result["document"]["nodes"][0]["data"] == {"title": "Empty"}
        assert "galleries" not in result

    def test_unhandled_nodes_projected_to_json(self):
        """Test that nodes without a handler keep their full JSON shape."""
        nodes = [
            paragraph("Hello"),
            block("quote", {"cite": "me"}, [text("bold", ["bold"])]),
        ]

        result = serialize_value(document(*nodes), {})

        assert result == {"document": {"object": "document", "data": {}, "nodes": nodes}}

    def test_nested_blocks_in_unhandled_blocks_are_serialized(self):
        """Test that blocks below an unhandled block still reach their handler."""
        value = document(
            block("ordered-list", nodes=[block("list-item", nodes=[block("image", {"file": "1"})])])
        )

        result = serialize_value(value, {"image": StubImageBlock()})

        item = result["document"]["nodes"][0]["nodes"][0]
        assert item["nodes"] == [
            {"object": "block", "type": "image", "data": {"_mutationPaths": ["images.create[0]"]}}
        ]

    def test_claimed_block_owns_subtree(self):
        """Test that blocks nested in a claimed block are not visited."""

        class ListBlock(Block):
            type = "ordered-list"

            def serialize(self, value, node):
                return SerializeResult(node=node.to_json())

        nested = block("ordered-list", nodes=[block("image", {"file": "1"})])

        result = serialize_value(document(nested), {"ordered-list": ListBlock(), "image": StubImageBlock()})

        assert result["document"]["nodes"] == [nested]
        assert "images" not in result

    def test_block_returning_none_result_defers(self):
        """Test that a None result falls back to the generic projection."""
        registry = BlockRegistry.from_config()
        nodes = [paragraph("deferred")]

        result = serialize_value(document(*nodes), registry)

        assert result["document"]["nodes"] == nodes

    def test_block_without_node_is_dropped(self):
        """Test that a result without a node removes the block."""

        class EmptyBlock(Block):
            type = "empty"

            def serialize(self, value, node):
                return SerializeResult(node=None)

        result = serialize_value(document(paragraph("a"), block("empty"), paragraph("b")), {"empty": EmptyBlock()})

        assert [node["type"] for node in result["document"]["nodes"]] == ["paragraph", "paragraph"]

    def test_handler_may_return_node_value(self):
        """Test that handlers may return a Node instead of JSON."""

        class NodeImageBlock(StubImageBlock):
            def serialize(self, value, node):
                return SerializeResult(
                    node=Node(kind="block", type="image"),
                    mutations={"create": {"file": node.data["file"]}},
                )

        result = serialize_value(document(block("image", {"file": "1"})), {"image": NodeImageBlock()})

        assert result["document"]["nodes"][0] == {
            "object": "block",
            "type": "image",
            "data": {"_mutationPaths": ["images.create[0]"]},
            "nodes": [],
        }

    def test_handler_receives_whole_value(self):
        """Test that handlers see the full document value."""
        seen = []

        class SpyBlock(Block):
            type = "spy"

            def serialize(self, value, node):
                seen.append(value)
                return None

        value = document(block("spy"))
        serialize_value(value, {"spy": SpyBlock()})

        assert seen == [value]

    def test_input_value_not_mutated(self):
        """Test that serializing leaves the value untouched."""
        value = document(block("image", {"file": "1"}))
        ContentSerializer({"image": StubImageBlock()}).serialize(value)
        assert value.document.nodes[0].data == {"file": "1"}


class TestSerializeErrors:
    """Tests for serializer configuration errors."""

    def test_mutations_without_node(self):
        """Test that mutations need a node to carry their paths."""

        class BrokenBlock(Block):
            type = "broken"
            path = "brokens"

            def serialize(self, value, node):
                return SerializeResult(node=None, mutations={"create": {}})

        with pytest.raises(ConfigurationError, match="Must return a serialized 'node'"):
            serialize_value(document(block("broken")), {"broken": BrokenBlock()})

    def test_mutations_without_path(self):
        """Test that mutations need a batch key."""

        class PathlessBlock(Block):
            type = "pathless"

            def serialize(self, value, node):
                return SerializeResult(node=node.to_json(), mutations={"create": {}})

        with pytest.raises(ConfigurationError, match="No mutation path set for block type 'pathless'"):
            serialize_value(document(block("pathless")), {"pathless": PathlessBlock()})

    def test_unknown_action(self):
        """Test that only create, connect and disconnect are accepted."""

        class UpdatingBlock(StubImageBlock):
            def serialize(self, value, node):
                return SerializeResult(node={"object": "block", "type": "image", "data": {}}, mutations={"update": {}})

        with pytest.raises(ConfigurationError, match="Unknown mutation action"):
            serialize_value(document(block("image")), {"image": UpdatingBlock()})

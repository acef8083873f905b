"""Deserialization of persisted documents back into rich values."""

from collections.abc import Mapping, Sequence
from typing import Any

from contentomatic.blocks.base import Block, record_id
from contentomatic.exceptions import ContractViolationError, PreconditionError
from contentomatic.mutations import JOIN_IDS_KEY
from contentomatic.tree.nodes import Node, Value, is_node
from contentomatic.tree.walker import DEFER, Replace, map_children, walk


def find_joins(join_ids: Sequence[Any], records: Sequence[Any]) -> list[Any]:
    """Return the record matching each join id, in join id order (None when missing)."""
    by_id = {}
    for record in records:
        by_id.setdefault(record_id(record), record)
    return [by_id.get(join_id) for join_id in join_ids]


class ContentDeserializer:
    """Rebuilds a document value from its persisted form and fetched records."""

    def __init__(self, blocks: Mapping[str, Block] | None):
        """
        Initialize deserializer with block handlers.

        Args:
            blocks: Block handlers keyed by block type
        """
        self.blocks = blocks

    def deserialize(self, serialized: Mapping[str, Any] | None) -> Value:
        """
        Deserialize a persisted document.

        Example input::

            {
                "document": [
                    {"object": "block", "type": "image", "data": {"_joinIds": ["abc123"]}},
                ],
                "images": [{"id": "abc123", "file": ..., "align": "center"}],
            }

        Only a ``None`` handler result falls back to the default handling.
        Any other result that is not a Node, including falsy values such as
        ``{}``, is a contract violation.

        Args:
            serialized: Mapping with the persisted document under "document"
                        and the fetched records of each block path

        Returns:
            Rebuilt document value

        Raises:
            PreconditionError: If the document or the block handlers are missing
            ContractViolationError: If a block handler returns something other
                                    than a Node
        """
        if not serialized or serialized.get("document") is None:
            raise PreconditionError("Must pass document to deserialize()")
        if self.blocks is None:
            raise PreconditionError("Must pass blocks to deserialize()")

        records_by_path = {key: value for key, value in serialized.items() if key != "document"}
        value = Value.from_json({"document": serialized["document"]})

        def visit_block(node: Node):
            block = self.blocks.get(node.type)
            # No matching block that we're in charge of
            if block is None:
                return DEFER

            records = (records_by_path.get(block.path) or []) if block.path else []
            join_ids = node.data.get(JOIN_IDS_KEY) or []
            joins = find_joins(join_ids, records)

            new_node = block.deserialize(node=node, joins=joins)
            if new_node is None:
                return DEFER

            if not is_node(new_node):
                raise ContractViolationError(
                    f"{type(block).__name__}.deserialize() must return a Node.",
                    block.type,
                )
            return Replace(new_node)

        def default_visitor(node: Node, recurse):
            if node.nodes is not None:
                return node.with_nodes(map_children(node.nodes, recurse))
            return node

        return value.model_copy(update={"document": walk(value.document, visit_block, default_visitor)})


def deserialize_value(serialized: Mapping[str, Any] | None, blocks: Mapping[str, Block] | None) -> Value:
    """Deserialize a persisted document with the given block handlers."""
    return ContentDeserializer(blocks).deserialize(serialized)

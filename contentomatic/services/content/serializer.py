"""Serialization of rich documents into mutation batches."""

import logging
from collections.abc import Mapping
from typing import Any

from contentomatic.blocks.base import Block, SerializeResult
from contentomatic.exceptions import ConfigurationError
from contentomatic.mutations import MUTATION_PATHS_KEY, MutationBatches, to_action
from contentomatic.tree.nodes import Node, Value
from contentomatic.tree.walker import DEFER, DROP, Replace, map_children, walk

logger = logging.getLogger(__name__)


class ContentSerializer:
    """Turns a document value into a plain document plus mutation batches."""

    def __init__(self, blocks: Mapping[str, Block]):
        """
        Initialize serializer with block handlers.

        Args:
            blocks: Block handlers keyed by block type
        """
        self.blocks = blocks

    def serialize(self, value: Value) -> dict[str, Any]:
        """
        Serialize a document value.

        Blocks claimed by a handler are replaced by the handler's serialized
        node; their mutations are collected per block path and action, and
        the node records each mutation's path in ``data._mutationPaths``.

        Example result for one image::

            {
                "document": {"object": "document", "data": {}, "nodes": [
                    {"object": "block", "type": "image",
                     "data": {"_mutationPaths": ["images.create[0]"]}},
                ]},
                "images": {"disconnectAll": True, "create": [{"file": ..., "align": "center"}]},
            }

        Args:
            value: Document value to serialize

        Returns:
            Serialized document under "document" plus one batch per touched path

        Raises:
            ConfigurationError: If a handler returns mutations without a node
                                or without a declared path
        """
        batches = MutationBatches()

        def visit_block(node: Node):
            block = self.blocks.get(node.type)
            # No matching block that we're in charge of
            if block is None:
                return DEFER

            result = block.serialize(value=value, node=node)
            if result is None:
                return DEFER

            serialized = self._attach_mutations(block, result, batches)
            if serialized is None:
                return DROP
            return Replace(serialized)

        def default_visitor(node: Node, recurse):
            visited = node.to_json(include_nodes=False)
            if node.nodes is not None:
                visited["nodes"] = map_children(node.nodes, recurse)
            return visited

        document = walk(value.document, visit_block, default_visitor)
        logger.debug(f"Serialized document with mutation batches for: {', '.join(batches.to_dict()) or 'none'}")
        return {"document": document, **batches.to_dict()}

    @staticmethod
    def _attach_mutations(
        block: Block, result: SerializeResult, batches: MutationBatches
    ) -> dict[str, Any] | None:
        serialized = result.node
        if isinstance(serialized, Node):
            serialized = serialized.to_json()
        elif serialized is not None:
            serialized = dict(serialized)

        mutations = []
        for action_name, entries in (result.mutations or {}).items():
            if not isinstance(entries, (list, tuple)):
                entries = [entries]
            mutations.append((to_action(action_name, block.type), entries))

        if not any(entries for _, entries in mutations):
            return serialized

        if serialized is None:
            raise ConfigurationError(
                f"Must return a serialized 'node' when returning 'mutations'. "
                f"See '{type(block).__name__}.serialize()'.",
                block.type,
            )
        if not block.path:
            raise ConfigurationError(
                f"No mutation path set for block type '{block.type}'. "
                f"Set a 'path' on the block corresponding to the mutation path for saving block data.",
                block.type,
            )

        data = dict(serialized.get("data") or {})
        mutation_paths = list(data.get(MUTATION_PATHS_KEY) or [])

        for action, entries in mutations:
            for entry in entries:
                mutation_path = batches.append(block.path, action, entry)
                mutation_paths.append(str(mutation_path))

        data[MUTATION_PATHS_KEY] = mutation_paths
        serialized["data"] = data
        return serialized


def serialize_value(value: Value, blocks: Mapping[str, Block]) -> dict[str, Any]:
    """Serialize a document value with the given block handlers."""
    return ContentSerializer(blocks).serialize(value)

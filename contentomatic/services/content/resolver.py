"""Resolution of mutation paths into join identifiers."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from contentomatic.blocks.base import Block
from contentomatic.exceptions import ConfigurationError
from contentomatic.mutations import JOIN_IDS_KEY, MUTATION_PATHS_KEY, MutationPath
from contentomatic.tree.walker import DEFER, Replace, map_children, walk

logger = logging.getLogger(__name__)


class MutationPathResolver:
    """Rewrites serialized block nodes to carry join ids instead of mutation paths."""

    def __init__(self, blocks: Mapping[str, Block] | Iterable[Block]):
        """
        Initialize resolver with block handlers.

        Args:
            blocks: Block handlers keyed by type, or an iterable of handlers
        """
        if isinstance(blocks, Mapping):
            blocks = blocks.values()
        self.blocks = list(blocks)

    def collect_results(self, mutation_results: Mapping[str, Any]) -> dict[str, Any]:
        """
        Merge every block's executed mutation results into one lookup.

        Several blocks may report the same path if they share it; their
        reports must agree.

        Raises:
            ConfigurationError: If two blocks report different results for
                                the same path
        """
        combined: dict[str, Any] = {}
        for block in self.blocks:
            for path, results in block.get_mutation_operation_results(mutation_results).items():
                if path in combined and combined[path] != results:
                    raise ConfigurationError(
                        f"Block type '{block.type}' reports conflicting mutation results for path '{path}'.",
                        block.type,
                    )
                combined[path] = results
        return combined

    def resolve(self, document: Mapping[str, Any], mutation_results: Mapping[str, Any]) -> dict[str, Any]:
        """
        Replace each block's ``_mutationPaths`` with the matching join ids.

        Args:
            document: Serialized document (JSON)
            mutation_results: Executed mutation results keyed by path, then action

        Returns:
            ``{"document": resolved_document}``

        Raises:
            ConfigurationError: If a block type has no handler or a mutation
                                path has no result
        """
        combined = self.collect_results(mutation_results)
        blocks_by_type = {block.type: block for block in self.blocks}

        def visit_block(node: Mapping[str, Any]):
            data = node.get("data") or {}
            mutation_paths = data.get(MUTATION_PATHS_KEY)
            if not mutation_paths:
                return DEFER

            block_type = node.get("type")
            if block_type not in blocks_by_type:
                raise ConfigurationError(
                    f"Received mutation for {block_type}, but no block types can handle it.",
                    block_type,
                )

            join_ids = [self._resolve_path(mutation_path, combined) for mutation_path in mutation_paths]

            # Only the outermost block is processed; child blocks are left as-is
            return Replace({**node, "data": {JOIN_IDS_KEY: join_ids}})

        def default_visitor(node: Mapping[str, Any], recurse):
            visited = dict(node)
            if visited.get("nodes") is not None:
                visited["nodes"] = map_children(visited["nodes"], recurse)
            return visited

        if isinstance(document, (list, tuple)):
            # Bare list of top-level nodes
            return {"document": map_children(document, lambda child: walk(child, visit_block, default_visitor))}
        return {"document": walk(document, visit_block, default_visitor)}

    @staticmethod
    def _resolve_path(mutation_path: str, combined: Mapping[str, Any]) -> Any:
        try:
            key = MutationPath.parse(mutation_path)
        except ValueError as e:
            raise ConfigurationError(f"Document refers to unknown mutation '{mutation_path}'.") from e

        join_id = key.lookup(combined)
        if not join_id:
            raise ConfigurationError(f"Document refers to unknown mutation '{mutation_path}'.")
        return join_id


def resolve_mutation_paths(
    document: Mapping[str, Any],
    blocks: Mapping[str, Block] | Iterable[Block],
    mutation_results: Mapping[str, Any],
) -> dict[str, Any]:
    """Resolve a serialized document's mutation paths with the given block handlers."""
    return MutationPathResolver(blocks).resolve(document, mutation_results)

"""Block registry mapping block types to handler instances."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Union

from contentomatic.blocks.base import Block
from contentomatic.blocks.paragraph import ParagraphBlock
from contentomatic.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Key of the document itself in serialized output; no block path may use it
RESERVED_PATHS = frozenset({"document"})

DEFAULT_BLOCKS: tuple[tuple[type[Block], dict[str, Any]], ...] = ((ParagraphBlock, {}),)

BlockSpec = Union[Block, type[Block], tuple[type[Block], Mapping[str, Any]]]


class BlockRegistry(Mapping[str, Block]):
    """Read-only mapping of block type to block handler.

    Built once per content field configuration. Duplicate types are rejected
    when the registry is built.
    """

    def __init__(self, blocks: Iterable[Block]):
        """
        Initialize registry with block handler instances.

        Args:
            blocks: Block handler instances

        Raises:
            ConfigurationError: If two blocks share a type or a block uses a
                                reserved path
        """
        self._blocks: dict[str, Block] = {}
        for block in blocks:
            block_type = getattr(block, "type", None)
            if not block_type:
                raise ConfigurationError(f"Block {block!r} does not declare a type")
            if block_type in self._blocks:
                raise ConfigurationError(
                    f"Encountered duplicate Content block type '{block_type}'.", block_type
                )
            if block.path in RESERVED_PATHS:
                raise ConfigurationError(
                    f"Block type '{block_type}' uses reserved mutation path '{block.path}'.",
                    block_type,
                )
            self._blocks[block_type] = block

        logger.debug(f"Registered content blocks: {', '.join(self._blocks)}")

    @classmethod
    def from_config(cls, blocks: Iterable[BlockSpec] | None = None) -> "BlockRegistry":
        """
        Build a registry from a field's block configuration.

        Each entry is a block instance, a block class, or a ``(class, config)``
        tuple. Default blocks are appended after the configured ones.

        Args:
            blocks: Configured blocks

        Returns:
            Registry of instantiated blocks
        """
        specs = list(blocks or []) + list(DEFAULT_BLOCKS)
        instances = []
        for spec in specs:
            if isinstance(spec, Block):
                instances.append(spec)
            elif isinstance(spec, tuple):
                block_class, block_config = spec
                instances.append(block_class(block_config))
            else:
                instances.append(spec())
        return cls(instances)

    def __getitem__(self, block_type: str) -> Block:
        return self._blocks[block_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    @property
    def types(self) -> list[str]:
        """Registered block types in registration order."""
        return list(self._blocks)

    def with_paths(self) -> list[Block]:
        """Blocks that store related records."""
        return [block for block in self._blocks.values() if block.path]

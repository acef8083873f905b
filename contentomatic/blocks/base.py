"""Block handler interface.

A block handler owns one block type of the document tree. It knows how to
turn a rich block node into a plain serializable node plus the mutations
needed to store the block's relational data, and how to rebuild the rich
node from the persisted node and the records those mutations produced.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from contentomatic.tree.nodes import Node, Value


@dataclass
class SerializeResult:
    """Result of :meth:`Block.serialize`.

    Attributes:
        node: Serialized node (JSON mapping or Node). None drops the block
              from the serialized document.
        mutations: Mutation entries keyed by action name ("create",
                   "connect", "disconnect"). Values are a single entry or a
                   list of entries.
    """

    node: Optional[Mapping[str, Any] | Node]
    mutations: dict[str, Any] = field(default_factory=dict)


def record_id(record: Any) -> Any:
    """Return the identifier of a mutation result or fetched record."""
    if isinstance(record, Mapping):
        return record.get("id")
    return getattr(record, "id", record)


class Block:
    """Base class for block handlers.

    Subclasses set ``type`` and, when they store related records, ``path``
    (the mutation batch key) and ``record_model`` (the SQLAlchemy model the
    batch targets). The default ``serialize`` and ``deserialize`` return None,
    which leaves the node to the generic tree handling.
    """

    type: ClassVar[str]
    path: ClassVar[Optional[str]] = None
    record_model: ClassVar[Optional[type]] = None
    record_includes: ClassVar[tuple[str, ...]] = ()

    def __init__(self, config: Mapping[str, Any] | None = None):
        """
        Initialize block with its field configuration.

        Args:
            config: Block-specific options
        """
        self.config = dict(config or {})

    def serialize(self, value: Value, node: Node) -> SerializeResult | None:
        """Serialize a block node. None defers to the generic projection."""
        return None

    def deserialize(self, node: Node, joins: Sequence[Any]) -> Node | None:
        """Rebuild a block node from its joins. None defers to the default handling."""
        return None

    def get_mutation_operation_results(
        self, results: Mapping[str, Any]
    ) -> dict[str, dict[str, list[Any]]]:
        """
        Pick this block's executed mutation results.

        Args:
            results: Executed mutation results keyed by path, then action

        Returns:
            ``{path: {action: [id, ...]}}`` for this block's path, or an empty
            mapping if the block has no path or nothing was executed for it
        """
        if not self.path or self.path not in results:
            return {}

        picked = {}
        for action, entries in results[self.path].items():
            if isinstance(entries, (list, tuple)):
                picked[action] = [record_id(entry) for entry in entries]
        return {self.path: picked}

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(type={getattr(self, 'type', None)!r}, path={self.path!r})>"

"""Generic recursive traversal of document trees.

The walker works on both :class:`~contentomatic.tree.nodes.Node` values and
their plain JSON mappings. Block nodes are offered to ``visit_block`` first,
which answers with an explicit outcome:

* ``Replace(node)``: the returned node replaces the block and the walk does
  not descend into it (the handler owns the subtree).
* ``DROP``: the block is removed from the output.
* ``DEFER``: the block is handled like any other node by ``default_visitor``.

Every other node goes to ``default_visitor(node, recurse)``, which decides
whether and how to descend into the node's children.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any

from contentomatic.tree.nodes import Node


class Outcome(Enum):
    """Non-replacing outcomes of a block visit."""

    DEFER = "defer"
    DROP = "drop"


DEFER = Outcome.DEFER
DROP = Outcome.DROP


@dataclass(frozen=True)
class Replace:
    """Replace the visited block with ``node``."""

    node: Any


BlockVisitor = Callable[[Any], "Replace | Outcome"]
DefaultVisitor = Callable[[Any, Callable[[Any], Any]], Any]


def node_kind(node: Any) -> str | None:
    """Return the ``object`` kind of a node or of its JSON form."""
    if isinstance(node, Node):
        return node.kind
    if isinstance(node, Mapping):
        return node.get("object")
    return None


def is_block(node: Any) -> bool:
    return node_kind(node) == "block"


def walk(node: Any, visit_block: BlockVisitor, default_visitor: DefaultVisitor) -> Any:
    """
    Walk a node and return its transformed counterpart.

    Args:
        node: Node (or JSON mapping) to walk
        visit_block: Called for block nodes, returns Replace, DROP or DEFER
        default_visitor: Called for all other nodes and deferred blocks with
                         the node and a bound ``recurse`` callable

    Returns:
        The transformed node, or None if the node was dropped
    """
    if is_block(node):
        outcome = visit_block(node)
        if isinstance(outcome, Replace):
            return outcome.node
        if outcome is DROP:
            return None
        if outcome is not DEFER:
            raise TypeError(
                f"visit_block must return Replace, DROP or DEFER, got {outcome!r}"
            )

    recurse = partial(walk, visit_block=visit_block, default_visitor=default_visitor)
    return default_visitor(node, recurse)


def map_children(children: Iterable[Any], recurse: Callable[[Any], Any]) -> list[Any]:
    """Map children through ``recurse``, leaving out dropped ones."""
    visited = []
    for child in children:
        result = recurse(child)
        if result is not None:
            visited.append(result)
    return visited

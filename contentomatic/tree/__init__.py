"""Document tree values and traversal."""

from contentomatic.tree.nodes import Mark, Node, Value, is_node
from contentomatic.tree.walker import DEFER, DROP, Replace, is_block, map_children, walk

__all__ = [
    "Mark",
    "Node",
    "Value",
    "is_node",
    "DEFER",
    "DROP",
    "Replace",
    "is_block",
    "map_children",
    "walk",
]

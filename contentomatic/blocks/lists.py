"""List blocks.

Lists are structural: their items are walked like any other node, so blocks
nested in a list item are still serialized by their own handlers.
"""

from contentomatic.blocks.base import Block


class ListItemBlock(Block):
    type = "list-item"


class OrderedListBlock(Block):
    type = "ordered-list"


class UnorderedListBlock(Block):
    type = "unordered-list"

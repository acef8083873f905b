"""Link block."""

from contentomatic.blocks.base import Block


class LinkBlock(Block):
    type = "link"

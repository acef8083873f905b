"""Caption block."""

from contentomatic.blocks.base import Block


class CaptionBlock(Block):
    type = "caption"

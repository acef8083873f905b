"""Paragraph block."""

from contentomatic.blocks.base import Block


class ParagraphBlock(Block):
    """Plain paragraph of text. Always registered."""

    type = "paragraph"

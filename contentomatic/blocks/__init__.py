"""Block handlers for content documents."""

from contentomatic.blocks.base import Block, SerializeResult
from contentomatic.blocks.caption import CaptionBlock
from contentomatic.blocks.image import ImageBlock
from contentomatic.blocks.link import LinkBlock
from contentomatic.blocks.lists import ListItemBlock, OrderedListBlock, UnorderedListBlock
from contentomatic.blocks.page_reference import PageReferenceBlock
from contentomatic.blocks.paragraph import ParagraphBlock
from contentomatic.blocks.registry import DEFAULT_BLOCKS, BlockRegistry

__all__ = [
    "Block",
    "SerializeResult",
    "BlockRegistry",
    "DEFAULT_BLOCKS",
    "CaptionBlock",
    "ImageBlock",
    "LinkBlock",
    "ListItemBlock",
    "OrderedListBlock",
    "UnorderedListBlock",
    "PageReferenceBlock",
    "ParagraphBlock",
]

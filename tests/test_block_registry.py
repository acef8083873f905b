"""Tests for block registration."""

import pytest

pytestmark = pytest.mark.unit

from contentomatic.blocks import (
    Block,
    BlockRegistry,
    CaptionBlock,
    ImageBlock,
    OrderedListBlock,
    PageReferenceBlock,
    ParagraphBlock,
)
from contentomatic.exceptions import ConfigurationError


class TestBlockRegistry:
    """Tests for building registries."""

    def test_lookup_by_type(self):
        """Test that blocks are keyed by their type."""
        registry = BlockRegistry([ImageBlock(), CaptionBlock()])
        assert isinstance(registry["image"], ImageBlock)
        assert registry.get("caption").type == "caption"
        assert registry.get("video") is None
        assert "image" in registry
        assert len(registry) == 2

    def test_duplicate_type_rejected(self):
        """Test that two blocks with the same type are a configuration error."""
        with pytest.raises(ConfigurationError, match="duplicate Content block type 'image'"):
            BlockRegistry([ImageBlock(), ImageBlock()])

    def test_duplicate_type_from_different_classes(self):
        """Test that duplicates are detected by type, not by class."""

        class OtherImageBlock(Block):
            type = "image"

        with pytest.raises(ConfigurationError) as exc_info:
            BlockRegistry([ImageBlock(), OtherImageBlock()])
        assert exc_info.value.block_type == "image"

    def test_reserved_path_rejected(self):
        """Test that no block may store records under the document key."""

        class DocumentBlock(Block):
            type = "doc"
            path = "document"

        with pytest.raises(ConfigurationError, match="reserved mutation path"):
            BlockRegistry([DocumentBlock()])

    def test_block_without_type_rejected(self):
        """Test that blocks must declare a type."""
        with pytest.raises(ConfigurationError):
            BlockRegistry([Block()])

    def test_types_in_registration_order(self):
        registry = BlockRegistry([OrderedListBlock(), ImageBlock()])
        assert registry.types == ["ordered-list", "image"]

    def test_with_paths(self):
        """Test selecting the blocks that store records."""
        registry = BlockRegistry([ImageBlock(), CaptionBlock(), PageReferenceBlock()])
        assert [block.type for block in registry.with_paths()] == ["image", "page-reference"]


class TestFromConfig:
    """Tests for building registries from field configuration."""

    def test_default_paragraph_appended(self):
        """Test that the paragraph block is always registered last."""
        registry = BlockRegistry.from_config([ImageBlock])
        assert registry.types == ["image", "paragraph"]
        assert isinstance(registry["paragraph"], ParagraphBlock)

    def test_empty_config(self):
        """Test that an empty configuration still has the default blocks."""
        assert BlockRegistry.from_config().types == ["paragraph"]

    def test_class_config_tuple(self):
        """Test that (class, config) entries pass the config to the block."""
        registry = BlockRegistry.from_config([(ImageBlock, {"align": "left"})])
        assert registry["image"].config == {"align": "left"}

    def test_instances_kept(self):
        """Test that block instances are registered as given."""
        image = ImageBlock({"align": "right"})
        registry = BlockRegistry.from_config([image])
        assert registry["image"] is image

    def test_configured_paragraph_is_duplicate(self):
        """Test that configuring the default block again is rejected."""
        with pytest.raises(ConfigurationError):
            BlockRegistry.from_config([ParagraphBlock])

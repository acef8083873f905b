"""Image block backed by image records."""

from collections.abc import Mapping, Sequence
from typing import Any

from contentomatic.blocks.base import Block, SerializeResult
from contentomatic.config import get_settings
from contentomatic.models.blocks import ImageRecord
from contentomatic.mutations import JOIN_IDS_KEY
from contentomatic.tree.nodes import Node, Value

# Record fields a stored image may change when it is saved again
EDITABLE_FIELDS = ("file", "align")


def public_url(file: Any) -> str | None:
    """Return the public URL of a stored file reference."""
    if isinstance(file, Mapping):
        return file.get("publicUrl") or file.get("url")
    if isinstance(file, str):
        return file
    return None


class ImageBlock(Block):
    """Image with alignment.

    A node carrying ``_joinIds`` (an image loaded from storage and saved
    again) reconnects its existing record and updates its ``file`` and
    ``align``. Otherwise a node with a ``file`` creates a new image record.
    Any other image node is empty and is dropped, including images whose
    record no longer exists.
    """

    type = "image"
    path = "images"
    record_model = ImageRecord

    def serialize(self, value: Value, node: Node) -> SerializeResult:
        data = node.data
        file = data.get("file")
        join_ids = data.get(JOIN_IDS_KEY) or []

        if join_ids:
            entry = {"id": join_ids[0]}
            entry.update({key: data[key] for key in EDITABLE_FIELDS if data.get(key) is not None})
            mutations = {"connect": [entry]}
        elif file is not None:
            align = data.get("align") or self.config.get("align") or get_settings().default_image_align
            mutations = {"create": {"file": file, "align": align}}
        else:
            return SerializeResult(node=None)

        return SerializeResult(
            node={"object": "block", "type": self.type, "data": {}},
            mutations=mutations,
        )

    def deserialize(self, node: Node, joins: Sequence[Any]) -> Node | None:
        if not joins:
            return None

        join = joins[0]
        if join is None:
            return Node(kind="block", type=self.type)

        file = join.get("file")
        return Node(
            kind="block",
            type=self.type,
            data={
                JOIN_IDS_KEY: list(node.data.get(JOIN_IDS_KEY) or []),
                "file": file,
                "publicUrl": public_url(file),
                "align": join.get("align"),
            },
        )
